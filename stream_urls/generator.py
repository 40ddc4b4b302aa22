"""Concatenate per-URL chunk streams, optionally sliced to a byte range."""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import AsyncGenerator
from typing import AsyncIterable
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from stream_urls.dispatcher import dispatch_fetch_streams
from stream_urls.types import ByteRange
from stream_urls.types import MetadataRecord
from stream_urls.types import OptionsLike
from stream_urls.types import StreamOptions
from stream_urls.utils import log_timing


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RangeState:
    """Accumulator threaded through every chunk of every URL."""

    bytes_seen: int = 0
    saw_range_start: bool = False


def advance_range_state(
    state: RangeState, chunk: bytes, byte_range: Optional[ByteRange]
) -> Tuple[RangeState, Optional[bytes]]:
    """Fold one chunk into the state and return what should be emitted for it.

    Until the running byte count passes `byte_range.start`, chunks are swallowed.
    The chunk that crosses it is sliced as chunk[start:start + end], using indices
    local to that chunk. Everything after is passed through whole.
    """
    if state.saw_range_start or byte_range is None or not byte_range.is_bounded:
        return state, chunk

    start = int(byte_range.start)  # type: ignore[arg-type]
    end = int(byte_range.end)  # type: ignore[arg-type]
    bytes_seen = state.bytes_seen + len(chunk)
    if bytes_seen <= start:
        return RangeState(bytes_seen=bytes_seen), None

    return RangeState(bytes_seen=bytes_seen, saw_range_start=True), chunk[start : start + end]


async def _close_all(fetch_streams: List[AsyncIterable[bytes]]) -> None:
    for fetch_stream in fetch_streams:
        closer = getattr(fetch_stream, "aclose", None)
        if closer is not None:
            await closer()


async def _emit(
    fetch_streams: List[AsyncIterable[bytes]], byte_range: Optional[ByteRange]
) -> AsyncGenerator[bytes, None]:
    state = RangeState()
    emitted_bytes = 0
    started = time.perf_counter()
    try:
        for fetch_stream in fetch_streams:
            async for chunk in fetch_stream:
                state, data = advance_range_state(state, chunk, byte_range)
                if data is None:
                    continue
                emitted_bytes += len(data)
                yield data
    finally:
        await _close_all(fetch_streams)

    log_timing(
        "concatenate",
        (time.perf_counter() - started) * 1000.0,
        extra={"streams": len(fetch_streams), "bytes": emitted_bytes, "bytes_seen": state.bytes_seen},
    )


def generate_chunk(urls: Sequence[str], options: OptionsLike = None) -> AsyncGenerator[bytes, None]:
    """Yield every chunk of every URL, in order, unmodified.

    Fetch streams are dispatched when this is called; nothing is requested until
    the returned generator is iterated.
    """
    opts = StreamOptions.coerce(options)
    return _emit(dispatch_fetch_streams(urls, opts), None)


def generate_chunk_with_metadata(
    urls: Sequence[str],
    metadata: Sequence[MetadataRecord],
    options: OptionsLike = None,
    byte_range: Optional[ByteRange] = None,
) -> AsyncGenerator[bytes, None]:
    """Yield the concatenated chunks of `urls`, sliced to a byte range if one is bounded.

    Args:
        urls: Resources to concatenate, in order.
        metadata: Records for the resources, as returned by get_metadata. Not consulted
            while emitting.
        options: StreamOptions or a mapping validating into one.
        byte_range: Range to apply; falls back to options.range when None.
    """
    opts = StreamOptions.coerce(options)
    if byte_range is None:
        byte_range = opts.range

    logger.debug(f"Generating chunks for {len(urls)} urls ({len(metadata)} metadata records) range={byte_range}")
    return _emit(dispatch_fetch_streams(urls, opts), byte_range)
