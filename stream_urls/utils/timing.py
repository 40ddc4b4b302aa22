"""Timing instrumentation for probes and stream setup."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any
from typing import AsyncGenerator


logger = logging.getLogger(__name__)


def _format_extra(extra: dict[str, Any] | None) -> str:
    return " ".join(f"{k}={v}" for k, v in (extra or {}).items())


@asynccontextmanager
async def async_timing_context(
    operation: str, *, log_threshold_ms: float = 0.0, extra: dict[str, Any] | None = None
) -> AsyncGenerator[dict[str, Any], None]:
    """Async context manager for timing async operations.

    Args:
        operation: Name of the operation being timed
        log_threshold_ms: Only log if duration exceeds this threshold (ms). 0 = always log.
        extra: Additional context to include in log

    Yields:
        Timing dict with 'start' field, will have 'duration_ms' on exit

    Example:
        async with async_timing_context("probe_head", extra={"url": url}):
            response = await probe_head(url, {})
        # Logs at DEBUG: "TIMING probe_head duration_ms=42.3 url=https://..."
    """
    ctx: dict[str, Any] = {"start": time.perf_counter()}
    if extra:
        ctx.update(extra)

    try:
        yield ctx
    finally:
        duration_ms = (time.perf_counter() - ctx["start"]) * 1000.0
        ctx["duration_ms"] = duration_ms

        if duration_ms >= log_threshold_ms:
            logger.debug(f"TIMING {operation} duration_ms={duration_ms:.2f} {_format_extra(extra)}".strip())


def log_timing(operation: str, duration_ms: float, *, extra: dict[str, Any] | None = None) -> None:
    """Direct timing log helper for manual timing."""
    logger.debug(f"TIMING {operation} duration_ms={duration_ms:.2f} {_format_extra(extra)}".strip())
