"""
Pydantic Schemas Package

Response models for the search API. Python attributes are snake_case;
the JSON wire format is camelCase.
"""

from booksearch.schemas.search import (
    AnalyzedItem,
    ErrorResponse,
    SearchResult,
)

__all__ = [
    "AnalyzedItem",
    "ErrorResponse",
    "SearchResult",
]
