from __future__ import annotations

import logging
from typing import AsyncIterable
from typing import List
from typing import Sequence

from stream_urls.transport import stream_request
from stream_urls.types import OptionsLike
from stream_urls.types import StreamOptions


logger = logging.getLogger(__name__)


def dispatch_fetch_streams(urls: Sequence[str], options: OptionsLike = None) -> List[AsyncIterable[bytes]]:
    """Build one lazy chunk iterable per URL, in input order.

    A custom mapper wins when it returns something truthy; otherwise the URL is
    streamed over HTTP. Errors only surface once an iterable is consumed.
    """
    opts = StreamOptions.coerce(options)
    mapper = opts.map_urls_to_fetch_streams

    fetch_streams: List[AsyncIterable[bytes]] = []
    for url in urls:
        stream = mapper(url, opts.map_urls_to_fetch_streams_options) if mapper is not None else None
        if not stream:
            stream = stream_request(url, opts.request_options, client=opts.client)
        fetch_streams.append(stream)

    logger.debug(f"Dispatched {len(fetch_streams)} fetch streams (custom_mapper={mapper is not None})")
    return fetch_streams
