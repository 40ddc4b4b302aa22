"""Read several HTTP resources as one continuous, optionally range-limited, stream."""

from stream_urls.config import Config  # noqa: F401
from stream_urls.config import get_config  # noqa: F401
from stream_urls.dispatcher import dispatch_fetch_streams  # noqa: F401
from stream_urls.exceptions import FetchStreamError  # noqa: F401
from stream_urls.exceptions import StreamConsumed  # noqa: F401
from stream_urls.exceptions import StreamUrlsError  # noqa: F401
from stream_urls.generator import generate_chunk  # noqa: F401
from stream_urls.generator import generate_chunk_with_metadata  # noqa: F401
from stream_urls.logging_config import setup_logging  # noqa: F401
from stream_urls.metadata import build_metadata_record  # noqa: F401
from stream_urls.metadata import get_metadata  # noqa: F401
from stream_urls.planning import RangePlan  # noqa: F401
from stream_urls.planning import plan_range  # noqa: F401
from stream_urls.resolver import get_stream_from_urls  # noqa: F401
from stream_urls.resolver import get_stream_from_urls_with_metadata  # noqa: F401
from stream_urls.streams import ConcatenatedStream  # noqa: F401
from stream_urls.types import ByteRange  # noqa: F401
from stream_urls.types import FetchStreamMapper  # noqa: F401
from stream_urls.types import MetadataRecord  # noqa: F401
from stream_urls.types import StreamOptions  # noqa: F401
from stream_urls.types import StreamWithMetadata  # noqa: F401


__all__ = [
    "ByteRange",
    "ConcatenatedStream",
    "Config",
    "FetchStreamError",
    "FetchStreamMapper",
    "MetadataRecord",
    "RangePlan",
    "StreamConsumed",
    "StreamOptions",
    "StreamUrlsError",
    "StreamWithMetadata",
    "build_metadata_record",
    "dispatch_fetch_streams",
    "generate_chunk",
    "generate_chunk_with_metadata",
    "get_config",
    "get_metadata",
    "get_stream_from_urls",
    "get_stream_from_urls_with_metadata",
    "plan_range",
    "setup_logging",
]
