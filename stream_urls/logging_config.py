"""Log setup for embedding services, plus the per-call stream id tag."""

from __future__ import annotations

import contextlib
import contextvars
import logging
import os
import sys
import uuid
from typing import Iterator
from typing import List
from typing import Optional

from loki_logger_handler.loki_logger_handler import LokiLoggerHandler

from stream_urls.config import Config
from stream_urls.config import get_config


NO_STREAM_ID = "no-stream-id"

FORMAT_WITH_STREAM_ID = "%(asctime)s %(levelname)s %(name)s [stream=%(stream_id)s] %(message)s"
FORMAT_PLAIN = "%(asctime)s %(levelname)s %(name)s %(message)s"

stream_id_context: contextvars.ContextVar[str] = contextvars.ContextVar("stream_id", default=NO_STREAM_ID)


def new_stream_id() -> str:
    return uuid.uuid4().hex[:16]


@contextlib.contextmanager
def stream_id_scope(stream_id: Optional[str] = None) -> Iterator[str]:
    """Tag log records with a stream id until the block exits, then restore the previous one."""
    stream_id = stream_id or new_stream_id()
    token = stream_id_context.set(stream_id)
    try:
        yield stream_id
    finally:
        stream_id_context.reset(token)


class StreamIDFilter(logging.Filter):
    """Fill in record.stream_id from the context unless the caller passed one via `extra`."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "stream_id"):
            record.stream_id = stream_id_context.get()
        return True


def _build_handlers(config: Config, service_name: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if not (config.loki_enabled and config.loki_url):
        return handlers

    handlers.append(
        LokiLoggerHandler(
            url=config.loki_url,
            labels={
                "service": service_name,
                "package": "stream_urls",
                "environment": config.environment,
                "host": os.getenv("HOSTNAME", "unknown"),
            },
            timeout=10,
            compressed=True,
        )
    )
    return handlers


def setup_logging(
    config: Optional[Config] = None,
    service_name: str = "stream_urls",
    include_stream_id: bool = True,
) -> logging.Logger:
    """
    Configure root logging for a process that embeds stream_urls.

    Args:
        config: Package configuration; read from the environment when omitted
        service_name: Logger name returned and the Loki "service" label
        include_stream_id: Add the stream id of the current resolve call to each line

    Returns:
        The logger named after service_name
    """
    config = config or get_config()
    handlers = _build_handlers(config, service_name)

    log_format = FORMAT_PLAIN
    if include_stream_id:
        stream_id_filter = StreamIDFilter()
        for handler in handlers:
            handler.addFilter(stream_id_filter)
        log_format = FORMAT_WITH_STREAM_ID

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
    )
    logging.getLogger("stream_urls").debug(f"Logging configured for {service_name} env={config.environment}")

    return logging.getLogger(service_name)
