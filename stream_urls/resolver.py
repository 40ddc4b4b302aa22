"""Entry points that turn a list of URLs into one readable stream."""

from __future__ import annotations

import logging
from typing import Optional
from typing import Sequence

from stream_urls.generator import generate_chunk
from stream_urls.generator import generate_chunk_with_metadata
from stream_urls.logging_config import stream_id_scope
from stream_urls.metadata import content_length_of
from stream_urls.metadata import get_metadata
from stream_urls.planning import plan_range
from stream_urls.streams import ConcatenatedStream
from stream_urls.types import OptionsLike
from stream_urls.types import StreamOptions
from stream_urls.types import StreamWithMetadata


logger = logging.getLogger(__name__)


def get_stream_from_urls(urls: Sequence[str], options: OptionsLike = None) -> ConcatenatedStream:
    """Concatenate `urls` into one readable stream, no metadata and no range."""
    return ConcatenatedStream(generate_chunk(urls, options))


async def get_stream_from_urls_with_metadata(
    urls: Sequence[str], options: OptionsLike = None
) -> Optional[StreamWithMetadata]:
    """
    Probe every URL, prune the list against options.range and stream what's left.

    The caller's list is not modified. The returned metadata covers every URL that
    was passed in, including the pruned ones.

    Returns:
        StreamWithMetadata, or None when `urls` is empty.
    """
    if not urls:
        return None

    opts = StreamOptions.coerce(options)

    with stream_id_scope() as stream_id:
        metadata = await get_metadata(urls, opts)
        content_lengths = [content_length_of(record) for record in metadata]

        plan = plan_range(content_lengths, opts.range)
        kept_urls = plan.apply(urls)
        logger.info(
            f"Streaming {len(kept_urls)}/{len(urls)} urls {stream_id=} "
            f"total_length={sum(content_lengths)} range={plan.range}"
        )

        chunks = generate_chunk_with_metadata(kept_urls, metadata, opts, plan.range)
    return StreamWithMetadata(stream=ConcatenatedStream(chunks), metadata=metadata)
