"""HTTP utilities for fetching remote resources with retry logic."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Final

import httpx

from page2md.config import (
    PAGE2MD_FETCH_BACKOFF_S,
    PAGE2MD_FETCH_MAX_RETRIES,
    PAGE2MD_FETCH_TIMEOUT_S,
    PAGE2MD_USER_AGENT,
)
from page2md.exceptions import FetchError

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


@dataclass(frozen=True)
class FetchedResource:
    """Body and declared media type of a fetched resource."""

    content: bytes
    content_type: str | None


async def fetch_resource(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> FetchedResource:
    """Fetch a resource from a URL with retry logic for transient failures.

    Args:
        url: The absolute URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The response body and its ``Content-Type`` header (if any).

    Raises:
        FetchError: If the server answers 404, any other non-retryable error
            status, or if the fetch still fails after all retries.
    """
    timeout = httpx.Timeout(PAGE2MD_FETCH_TIMEOUT_S)
    headers = {"User-Agent": PAGE2MD_USER_AGENT}

    async def do_fetch(http_client: httpx.AsyncClient) -> FetchedResource:
        last_exc: Exception | None = None

        for attempt in range(PAGE2MD_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)

                if response.status_code == 404:
                    raise FetchError(f"Resource not found at {url}")

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return FetchedResource(
                        content=response.content,
                        content_type=response.headers.get("content-type"),
                    )
            except httpx.RequestError as exc:
                last_exc = exc
            except httpx.HTTPStatusError as exc:
                raise FetchError(f"HTTP {exc.response.status_code} from {url}") from exc

            if attempt < PAGE2MD_FETCH_MAX_RETRIES:
                backoff = PAGE2MD_FETCH_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
