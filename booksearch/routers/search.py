"""
Search Router

The service's only route: GET /search?q=...

The handler hands the raw q value to the search pipeline and writes the
outcome as JSON. Validation of q happens in the pipeline, not in FastAPI,
so a missing parameter yields the service's own 400 body.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from booksearch.dependencies import SearchPipelineDep
from booksearch.schemas.search import ErrorResponse, SearchResult


class UTF8JSONResponse(JSONResponse):
    """JSON response that states its charset explicitly."""

    media_type = "application/json; charset=utf-8"


router = APIRouter(
    prefix="/search",
    tags=["Search"],
)


@router.get(
    "",
    response_class=UTF8JSONResponse,
    summary="Search books",
    description="""
Search the books API and rank the results by their descriptions.

**Ranking:**
1. Words starting with an uppercase letter (most first)
2. Distinct words, case-insensitive (most first)

**Caching:**
Results are cached per query for the life of the process. Concurrent
identical queries share a single upstream call. Failures are not cached.
""",
    responses={
        200: {"model": SearchResult},
        400: {"model": ErrorResponse, "description": "Missing parameter q"},
        404: {"model": ErrorResponse, "description": "No books found"},
        502: {"model": ErrorResponse, "description": "Books API unavailable"},
    },
)
async def search_books(
    pipeline: SearchPipelineDep,
    q: Annotated[
        str | None,
        Query(
            description="Search query",
            examples=["dune", "inauthor:tolkien"],
        )
    ] = None,
) -> UTF8JSONResponse:
    """
    Search endpoint.

    Returns the ranked result with status 200, or an error body with the
    status of the typed failure.
    """
    outcome = await pipeline.run(q)
    return UTF8JSONResponse(status_code=outcome.status_code, content=outcome.body())
