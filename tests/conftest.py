"""
pytest Fixtures for Book Search Tests

This file contains shared fixtures used across all test files.

The books API is never contacted: every test talks to FakeBooksAPI
through httpx.MockTransport, which records each outbound request so
tests can count upstream calls.

For endpoint tests, the search pipeline dependency is overridden with
one wired to the fake, the same way a database session would be.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["BOOKS_API_URL"] = "https://books.test/volumes"
os.environ["BOOKS_API_QUERY_PREFIX"] = ""
os.environ["DEBUG"] = "false"

import asyncio
from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from booksearch.config import get_settings
from booksearch.dependencies import get_search_pipeline
from booksearch.main import app
from booksearch.services.cache import ResponseCache
from booksearch.services.catalog_client import CatalogClient
from booksearch.services.pipeline import SearchPipeline

# =============================================================================
# SAMPLE PAYLOADS
# =============================================================================

SAMPLE_PAYLOAD = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [
        {
            "volumeInfo": {
                "title": "Dune Messiah",
                "description": "twelve years later.",
            }
        },
        {
            "volumeInfo": {
                "title": "Dune",
                "description": "Paul Atreides travels to Arrakis. "
                               "The desert planet Arrakis is harsh.",
            }
        },
        {
            "volumeInfo": {
                "title": "Children of Dune",
                "description": "Leto and Ghanima, the twins of Paul, inherit the Empire.",
            }
        },
    ],
}

NO_ITEMS_PAYLOAD = {"kind": "books#volumes", "totalItems": 0}

EMPTY_ITEMS_PAYLOAD = {"kind": "books#volumes", "totalItems": 0, "items": []}


# =============================================================================
# FAKE BOOKS API
# =============================================================================


class FakeBooksAPI:
    """
    In-memory stand-in for the books API.

    Attributes:
        calls: Every request received, in order
        payload: JSON body returned for successful calls
        status_code: Status of every response
        content: Raw body that replaces payload when set
        delay: Seconds to wait before answering
        error: Exception raised instead of answering
    """

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.payload: dict = SAMPLE_PAYLOAD
        self.status_code = 200
        self.content: bytes | None = None
        self.delay = 0.0
        self.error: Exception | None = None

    @property
    def queries(self) -> list[str]:
        """Decoded q parameter of every call."""
        return [request.url.params.get("q") for request in self.calls]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def settings():
    """Application settings pointing at the fake books API."""
    return get_settings()


@pytest.fixture
def upstream() -> FakeBooksAPI:
    """A fresh fake books API for each test."""
    return FakeBooksAPI()


@pytest.fixture
def catalog_client(upstream: FakeBooksAPI, settings) -> CatalogClient:
    """Books API client whose transport is the fake."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return CatalogClient(http_client, settings)


@pytest.fixture
def cache() -> ResponseCache:
    """An empty response cache."""
    return ResponseCache()


@pytest.fixture
def pipeline(catalog_client: CatalogClient, cache: ResponseCache) -> SearchPipeline:
    """Search pipeline wired to the fake books API and a fresh cache."""
    return SearchPipeline(client=catalog_client, cache=cache)


@pytest.fixture
def override_pipeline(pipeline: SearchPipeline) -> Generator[SearchPipeline, None, None]:
    """
    Make the app use the test pipeline.

    The override is removed after the test.
    """

    def override_get_search_pipeline():
        """Provide the test pipeline instead of the one built at startup."""
        return pipeline

    app.dependency_overrides[get_search_pipeline] = override_get_search_pipeline
    yield pipeline
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_pipeline: SearchPipeline) -> Generator[TestClient, None, None]:
    """
    Create a test client for the app.

    Makes HTTP requests to the FastAPI app without running a server.
    """
    with TestClient(app) as test_client:
        yield test_client
