from __future__ import annotations

import contextlib
import logging
from typing import List
from typing import Optional
from typing import Sequence

import httpx

from stream_urls.config import get_config
from stream_urls.transport import probe_get_cancellable
from stream_urls.transport import probe_head
from stream_urls.types import MetadataRecord
from stream_urls.types import OptionsLike
from stream_urls.types import StreamOptions
from stream_urls.utils import async_timing_context
from stream_urls.utils import parse_content_length


logger = logging.getLogger(__name__)

# Live transport handles that are useless once the probe is closed
TRANSPORT_FIELDS = frozenset({"stream", "extensions"})

# Public properties that don't show up in the response's instance dict
DERIVED_FIELDS = ("url", "http_version", "reason_phrase")


def build_metadata_record(response: Optional[httpx.Response]) -> MetadataRecord:
    """Copy the public, non-callable fields of a probe response into a plain dict."""
    if response is None:
        return {}

    record: MetadataRecord = {}
    for key, value in vars(response).items():
        if key.startswith("_") or callable(value) or key in TRANSPORT_FIELDS:
            continue
        record[key] = value

    for key in DERIVED_FIELDS:
        # url needs the originating request, which hand-built responses may lack
        with contextlib.suppress(RuntimeError):
            value = getattr(response, key)
            record[key] = str(value) if isinstance(value, httpx.URL) else value

    return record


def content_length_of(record: MetadataRecord) -> int:
    headers = record.get("headers") or {}
    return parse_content_length(headers.get("content-length"))


async def _probe(url: str, opts: StreamOptions, log_threshold_ms: float) -> Optional[httpx.Response]:
    response: Optional[httpx.Response] = None

    try:
        async with async_timing_context("probe_head", log_threshold_ms=log_threshold_ms, extra={"url": url}):
            response = await probe_head(url, opts.request_options, client=opts.client)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        if opts.log_error:
            logger.error(f"HEAD probe failed for {url}: {e!r}")

    # Servers that don't support HEAD get a GET that is closed once headers arrive
    if response is None:
        try:
            async with async_timing_context("probe_get", log_threshold_ms=log_threshold_ms, extra={"url": url}):
                response = await probe_get_cancellable(url, opts.request_options, client=opts.client)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if opts.log_error:
                logger.error(f"GET probe failed for {url}: {e!r}")

    return response


async def get_metadata(urls: Sequence[str], options: OptionsLike = None) -> List[MetadataRecord]:
    """Probe every URL in order and return one metadata record per URL.

    Probe failures never raise; a URL that can't be probed at all gets an empty record.
    """
    opts = StreamOptions.coerce(options)
    log_threshold_ms = get_config().probe_timing_threshold_ms

    metadata: List[MetadataRecord] = []
    for url in urls:
        response = await _probe(url, opts, log_threshold_ms)
        metadata.append(build_metadata_record(response))

    return metadata
