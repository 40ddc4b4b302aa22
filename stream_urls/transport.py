"""httpx-backed transport used to stream resources and probe their metadata."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any
from typing import AsyncGenerator
from typing import AsyncIterator
from typing import Mapping
from typing import Optional

import httpx

from stream_urls.config import get_config
from stream_urls.exceptions import FetchStreamError


logger = logging.getLogger(__name__)


def new_client() -> httpx.AsyncClient:
    config = get_config()
    return httpx.AsyncClient(
        timeout=config.http_timeout(),
        follow_redirects=config.follow_redirects,
    )


@asynccontextmanager
async def client_scope(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client untouched, or a fresh one closed on exit."""
    if client is not None:
        yield client
        return
    async with new_client() as owned:
        yield owned


async def stream_request(
    url: str,
    request_options: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> AsyncGenerator[bytes, None]:
    """Stream the body of `url` chunk by chunk.

    Nothing is requested until the first chunk is pulled. Non-2xx responses and
    transport failures are raised as FetchStreamError to whoever is iterating.
    """
    chunk_size = get_config().stream_chunk_size or None
    try:
        async with client_scope(client) as http:  # noqa: SIM117
            async with http.stream("GET", url, **dict(request_options or {})) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes(chunk_size=chunk_size):
                    yield chunk
    except httpx.HTTPStatusError as e:
        raise FetchStreamError(url, str(e), status_code=e.response.status_code) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchStreamError(url, str(e)) from e


async def probe_head(
    url: str,
    request_options: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> httpx.Response:
    """HEAD `url`, raising httpx errors for failures and 4xx/5xx statuses."""
    async with client_scope(client) as http:
        response = await http.head(url, **dict(request_options or {}))
        response.raise_for_status()
        return response


async def probe_get_cancellable(
    url: str,
    request_options: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> httpx.Response:
    """GET `url` but close the response as soon as its headers have arrived.

    For servers that reject HEAD. The body is never read, and the response is
    returned whatever its status.
    """
    async with client_scope(client) as http:  # noqa: SIM117
        async with http.stream("GET", url, **dict(request_options or {})) as response:
            logger.debug(f"Headers received for {url} status={response.status_code}, closing probe")
    return response
