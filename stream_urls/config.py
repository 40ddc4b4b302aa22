import dataclasses

import dotenv
import httpx

from stream_urls.utils import as_bool
from stream_urls.utils import env


dotenv.load_dotenv()


@dataclasses.dataclass
class Config:
    """Package configuration settings."""

    # Logging
    log_level: str = env("STREAM_URLS_LOG_LEVEL:INFO")
    loki_url: str = env("STREAM_URLS_LOKI_URL:", convert=str)
    loki_enabled: bool = env("STREAM_URLS_LOKI_ENABLED:false", convert=as_bool)
    environment: str = env("STREAM_URLS_ENVIRONMENT:development")

    # Default for StreamOptions.log_error when the caller doesn't set it
    log_errors: bool = env("STREAM_URLS_LOG_ERRORS:false", convert=as_bool)
    # Probe timings below this threshold are not logged
    probe_timing_threshold_ms: float = env("STREAM_URLS_PROBE_TIMING_THRESHOLD_MS:0", convert=float)

    # HTTP transport
    http_timeout_seconds: float = env("STREAM_URLS_HTTP_TIMEOUT_SECONDS:60.0", convert=float)
    http_connect_timeout_seconds: float = env("STREAM_URLS_HTTP_CONNECT_TIMEOUT_SECONDS:10.0", convert=float)
    follow_redirects: bool = env("STREAM_URLS_FOLLOW_REDIRECTS:true", convert=as_bool)

    # chunk size used when iterating response bodies; 0 means "as received"
    stream_chunk_size: int = env("STREAM_URLS_STREAM_CHUNK_SIZE:0", convert=int)

    def http_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.http_connect_timeout_seconds)


def get_config() -> Config:
    """Get package configuration."""
    cfg = Config()

    if cfg.http_timeout_seconds <= 0:
        raise ValueError("STREAM_URLS_HTTP_TIMEOUT_SECONDS must be positive")

    # Connect timeout can't outlive the overall timeout
    if cfg.http_connect_timeout_seconds <= 0 or cfg.http_connect_timeout_seconds > cfg.http_timeout_seconds:
        object.__setattr__(cfg, "http_connect_timeout_seconds", cfg.http_timeout_seconds)

    object.__setattr__(cfg, "stream_chunk_size", max(0, int(cfg.stream_chunk_size)))
    object.__setattr__(cfg, "log_level", (cfg.log_level or "INFO").strip().upper())
    object.__setattr__(cfg, "environment", (cfg.environment or "development").strip().strip("\"'"))

    return cfg
