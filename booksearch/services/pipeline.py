"""
Search Pipeline

Runs one search request end to end:

    Received -> Validated -> CacheLookup -> Hit -> Respond
                                         -> Miss -> Fetch -> Transform -> Store -> Respond

The pipeline is the error boundary: run() never raises for a request-level
failure. Every outcome, good or bad, comes back as a SearchOutcome that
the router serializes into exactly one JSON response.
"""

import logging
from dataclasses import dataclass

from booksearch.exceptions import InternalError, MissingQueryError, SearchError
from booksearch.schemas.search import ErrorResponse, SearchResult
from booksearch.services.cache import ResponseCache
from booksearch.services.catalog import transform
from booksearch.services.catalog_client import CatalogClient

logger = logging.getLogger(__name__)


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class Success:
    """A search that produced a result (possibly with zero items)."""

    result: SearchResult

    @property
    def status_code(self) -> int:
        return 200

    def body(self) -> dict:
        return self.result.to_body()


@dataclass(frozen=True)
class Failure:
    """A search that ended in a typed error."""

    error: SearchError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    def body(self) -> dict:
        return ErrorResponse(error=self.error.message).model_dump()


SearchOutcome = Success | Failure


# =============================================================================
# Pipeline
# =============================================================================


def normalize_query(query: str | None) -> str:
    """
    Trim the raw q parameter.

    Raises:
        MissingQueryError: If q is missing, empty or whitespace-only
    """
    if query is None or not query.strip():
        raise MissingQueryError()
    return query.strip()


class SearchPipeline:
    """
    Validate, look up, fetch, transform and store one search.

    Shared by all requests; its only mutable state lives in the cache.
    """

    def __init__(self, client: CatalogClient, cache: ResponseCache, debug: bool = False):
        self.client = client
        self.cache = cache
        self.debug = debug

    def cache_key(self, query: str) -> str:
        """The cache key is the outbound request URL for the query."""
        return self.client.build_url(query)

    async def search(self, query: str | None) -> SearchResult:
        """
        Serve a search from cache or from the books API.

        Raises:
            SearchError: Any typed failure along the way
        """
        normalized = normalize_query(query)
        key = self.cache_key(normalized)

        async def compute() -> SearchResult:
            payload = await self.client.fetch(normalized)
            return transform(payload)

        return await self.cache.get_or_compute(key, compute)

    async def run(self, query: str | None) -> SearchOutcome:
        """
        Serve a search and convert every failure into an outcome.

        Returns:
            Success with the result, or Failure with a typed error
        """
        try:
            result = await self.search(query)
        except SearchError as e:
            logger.info(f"Search for {query!r} failed: {e.status_code} {e.message}")
            return Failure(e)
        except Exception as e:
            logger.error(f"Unexpected error while searching {query!r}: {e}", exc_info=True)
            message = f"Error: {e}" if self.debug else InternalError.default_message
            return Failure(InternalError(message))

        logger.debug(f"Search for {query!r} served ({self.cache.stats()})")
        return Success(result)
