from __future__ import annotations

from typing import Any
from typing import AsyncIterable
from typing import Callable
from typing import Dict
from typing import List
from typing import Mapping
from typing import NamedTuple
from typing import Optional
from typing import Protocol
from typing import Union

import httpx
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from stream_urls.config import get_config
from stream_urls.streams import ConcatenatedStream


# One record per URL, holding the public fields of the probe response
MetadataRecord = Dict[str, Any]


class FetchStreamMapper(Protocol):
    """Produces the byte chunks for one URL, or None to use the HTTP transport."""

    def __call__(self, url: str, options: Any) -> Optional[AsyncIterable[bytes]]: ...


class ByteRange(BaseModel):
    """Byte window over the concatenated resources.

    `start` is the first byte to include. `end` is added to `start` when slicing the
    chunk that crosses `start`, and is treated as an inclusive absolute offset when
    pruning resources against their content lengths.
    """

    start: Optional[int] = Field(default=None, ge=0)
    end: Optional[int] = Field(default=None, ge=0)

    @property
    def is_bounded(self) -> bool:
        return isinstance(self.start, int) and isinstance(self.end, int)


class StreamOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Extra keyword arguments for httpx requests (headers, params, timeout, ...)
    request_options: Dict[str, Any] = Field(default_factory=dict)
    map_urls_to_fetch_streams: Optional[Callable[..., Optional[AsyncIterable[bytes]]]] = None
    map_urls_to_fetch_streams_options: Any = None
    log_error: bool = Field(default_factory=lambda: get_config().log_errors)
    range: Optional[ByteRange] = None
    # Caller-owned client; when unset each request opens its own
    client: Optional[httpx.AsyncClient] = None

    @classmethod
    def coerce(cls, options: OptionsLike) -> StreamOptions:
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))


OptionsLike = Union[StreamOptions, Mapping[str, Any], None]


class StreamWithMetadata(NamedTuple):
    stream: ConcatenatedStream
    metadata: List[MetadataRecord]
