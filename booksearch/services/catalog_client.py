"""
Books API Client

Fetches raw search results from the external book-search endpoint
(Google Books by default) over a shared httpx.AsyncClient.

Features:
- One connection pool for the whole application (created in the lifespan)
- Query percent-encoding that escapes every reserved character
- Typed errors for unreachable upstream, bad status and bad payload

Usage:
    client = CatalogClient(http_client, settings)
    payload = await client.fetch("dune")
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from booksearch.config import Settings
from booksearch.exceptions import (
    MalformedUpstreamResponse,
    UpstreamError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create the shared HTTP client for books API calls.

    Connection failures are retried by the transport itself
    (settings.upstream_retries); read timeouts are not.

    Returns:
        Configured httpx.AsyncClient (caller closes it on shutdown)
    """
    transport = httpx.AsyncHTTPTransport(retries=settings.upstream_retries)
    return httpx.AsyncClient(
        transport=transport,
        timeout=settings.upstream_timeout,
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )


class CatalogClient:
    """
    Stateless client for the books API.

    The only state is the httpx client handle, which is safe for
    concurrent use, so requests share it without locking.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.base_url = settings.books_api_url
        self.query_prefix = settings.books_api_query_prefix

    def build_url(self, query: str) -> str:
        """
        Build the outbound request URL for a query.

        The URL doubles as the cache key: two queries share a key exactly
        when they produce the same request.

        Examples:
            build_url("dune") -> ".../volumes?q=dune"
            build_url("c# & .net") -> ".../volumes?q=c%23%20%26%20.net"
        """
        encoded = quote(f"{self.query_prefix}{query}", safe="")
        return f"{self.base_url}?q={encoded}"

    async def fetch(self, query: str) -> Any:
        """
        Fetch the raw search payload for a query.

        Args:
            query: Normalized (trimmed) search query

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamUnavailable: On timeout, DNS, connection, redirect-loop
                or content-decoding failure
            UpstreamError: On a non-success status from the books API
            MalformedUpstreamResponse: If the body is not valid JSON
        """
        url = self.build_url(query)

        try:
            response = await self.http_client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Books API timed out for {url}: {e!r}")
            raise UpstreamUnavailable("request timed out") from e
        except httpx.RequestError as e:
            logger.warning(f"Books API request failed for {url}: {e!r}")
            raise UpstreamUnavailable(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(f"Books API returned {response.status_code} for {url}")
            raise UpstreamError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Books API returned invalid JSON for {url}: {e}")
            raise MalformedUpstreamResponse() from e
