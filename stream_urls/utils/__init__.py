"""Utility modules and functions for stream_urls.

This package combines the helpers from utils_core.py with the timing utilities.
"""

# Explicit imports only - no star imports to avoid namespace pollution
from stream_urls.utils.timing import async_timing_context  # noqa: F401
from stream_urls.utils.timing import log_timing  # noqa: F401
from stream_urls.utils_core import as_bool  # noqa: F401
from stream_urls.utils_core import env  # noqa: F401
from stream_urls.utils_core import parse_content_length  # noqa: F401


__all__ = [
    # From utils_core.py
    "as_bool",
    "env",
    "parse_content_length",
    # From timing.py
    "async_timing_context",
    "log_timing",
]
