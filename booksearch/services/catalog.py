"""
Catalog Transform

Turns a decoded books API payload into a ranked SearchResult.

Payload shape (Google Books volumes search):
    {
        "totalItems": 2,
        "items": [
            {"volumeInfo": {"title": "...", "description": "..."}},
            ...
        ]
    }

Rules:
- No "items" key (or "items": null) means nothing was found -> NoItemsFound
- An empty "items" list is a valid result with zero items
- Entries whose title and description are both blank are skipped
- Ranking: uppercase word count desc, then unique word count desc;
  sorted() is stable, so remaining ties keep upstream order
"""

import logging
from typing import Any

from booksearch.exceptions import MalformedUpstreamResponse, NoItemsFound
from booksearch.schemas.search import AnalyzedItem, SearchResult
from booksearch.services.analyzer import analyze

logger = logging.getLogger(__name__)


def _text_field(info: dict[str, Any], name: str) -> str:
    """Read an optional string field, defaulting to an empty string."""
    value = info.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedUpstreamResponse(
            f"Books API returned a non-text '{name}' field."
        )
    return value


def extract_item(raw_item: Any) -> tuple[str, str]:
    """
    Extract (title, description) from one raw catalog entry.

    Missing volumeInfo, title or description all default to "".
    """
    if not isinstance(raw_item, dict):
        raise MalformedUpstreamResponse("Books API returned a non-object item.")

    info = raw_item.get("volumeInfo")
    if info is None:
        return "", ""
    if not isinstance(info, dict):
        raise MalformedUpstreamResponse("Books API returned a non-object volumeInfo.")

    return _text_field(info, "title"), _text_field(info, "description")


def analyze_item(title: str, description: str) -> AnalyzedItem:
    """Build an AnalyzedItem from the description's metrics."""
    metrics = analyze(description)
    return AnalyzedItem(
        title=title,
        description=description,
        uppercase_word_count=metrics.uppercase_word_count,
        unique_word_count=metrics.unique_word_count,
    )


def rank_items(items: list[AnalyzedItem]) -> list[AnalyzedItem]:
    """Sort by uppercase word count desc, then unique word count desc."""
    return sorted(
        items,
        key=lambda item: (-item.uppercase_word_count, -item.unique_word_count),
    )


def transform(payload: Any) -> SearchResult:
    """
    Map a books API payload to a ranked SearchResult.

    Args:
        payload: Decoded JSON body of the books API response

    Returns:
        SearchResult with surviving items ranked

    Raises:
        NoItemsFound: If the payload carries no catalog list
        MalformedUpstreamResponse: If the payload has an unexpected shape
    """
    if not isinstance(payload, dict):
        raise MalformedUpstreamResponse("Books API returned a non-object payload.")

    raw_items = payload.get("items")
    if raw_items is None:
        raise NoItemsFound()
    if not isinstance(raw_items, list):
        raise MalformedUpstreamResponse("Books API returned a non-list 'items' field.")

    analyzed = []
    for raw_item in raw_items:
        title, description = extract_item(raw_item)
        if not title.strip() and not description.strip():
            continue
        analyzed.append(analyze_item(title, description))

    ranked = rank_items(analyzed)
    logger.debug(f"Analyzed {len(ranked)} of {len(raw_items)} catalog entries")

    return SearchResult(total_count=len(ranked), items=tuple(ranked))
