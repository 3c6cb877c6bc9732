"""
Search Pydantic Schemas

Response shapes for the /search endpoint. Field names are snake_case in
Python and camelCase on the wire (totalCount, uppercaseWordCount, ...),
handled by the to_camel alias generator.

Models are frozen: a SearchResult is shared by every request that hits
the same cache entry, so nothing may change it after it is built.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalyzedItem(BaseModel):
    """
    A catalog entry with its text metrics.

    Example:
    {
        "title": "1984",
        "description": "Winston Smith works at the Ministry of Truth.",
        "uppercaseWordCount": 5,
        "uniqueWordCount": 8
    }
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = Field(default="", description="Book title")
    description: str = Field(default="", description="Book description")
    uppercase_word_count: int = Field(
        default=0,
        ge=0,
        description="Description words starting with an uppercase letter",
    )
    unique_word_count: int = Field(
        default=0,
        ge=0,
        description="Distinct description words, case-insensitive",
    )


class SearchResult(BaseModel):
    """Ranked analysis of one books API answer."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_count: int = Field(ge=0, description="Number of items returned")
    items: tuple[AnalyzedItem, ...] = Field(
        default=(),
        description="Items ranked by uppercase words, then unique words",
    )

    def to_body(self) -> dict:
        """Serialize with the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorResponse(BaseModel):
    """Body of every non-200 response."""

    error: str = Field(description="Human-readable error message")
