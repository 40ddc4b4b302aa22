"""Utility functions for the stream-urls package."""

import dataclasses
import logging
import os
import typing
from typing import Any
from typing import Callable
from typing import Optional
from typing import TypeVar


T = TypeVar("T")

logger = logging.getLogger(__name__)


def env(key: str, convert: Callable[[str], T] = typing.cast(Callable[[str], T], str), **kwargs: Any) -> T:
    """Load a value from environment variables with optional default and type conversion.

    The key may carry a default after a colon: ``env("FOO:bar")`` reads ``FOO`` and
    falls back to ``"bar"``. Without a colon the variable is required.
    """
    key, partition, default = key.partition(":")

    def default_factory(
        key_val: str = key, default_val: str = default, convert_func: Callable[[str], T] = convert
    ) -> T:
        if key_val in os.environ:
            return convert_func(os.environ[key_val])

        if partition == ":":
            return convert_func(default_val)

        raise KeyError(key_val)

    return typing.cast(T, dataclasses.field(default_factory=default_factory, **kwargs))


def as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_content_length(value: Optional[str]) -> int:
    """Parse a content-length header value, treating anything unusable as 0."""
    if value is None:
        return 0
    try:
        length = int(str(value).strip())
    except ValueError:
        logger.debug(f"Unparsable content-length {value!r}, treating as 0")
        return 0
    if length < 0:
        logger.debug(f"Negative content-length {value!r}, treating as 0")
        return 0
    return length
