from __future__ import annotations

from types import TracebackType
from typing import AsyncIterable
from typing import AsyncIterator
from typing import Optional
from typing import Type

import httpx

from stream_urls.exceptions import StreamConsumed


class ConcatenatedStream(httpx.AsyncByteStream):
    """Single-pass readable stream over the chunks of several resources.

    Being an httpx.AsyncByteStream, it can be passed straight to httpx as request
    content, or to anything else that accepts an async iterable of bytes.
    """

    def __init__(self, chunks: AsyncIterable[bytes]) -> None:
        self._chunks = chunks
        self._consumed = False
        self._closed = False

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self._consumed:
            raise StreamConsumed("Concatenated stream can only be iterated once")
        self._consumed = True
        async for chunk in self._chunks:
            yield chunk

    async def read(self) -> bytes:
        """Drain the whole stream into a single bytes object.

        Raises StreamConsumed if the stream has already been iterated, even partially.
        """
        return b"".join([chunk async for chunk in self])

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        closer = getattr(self._chunks, "aclose", None)
        if closer is not None:
            await closer()

    async def __aenter__(self) -> ConcatenatedStream:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
