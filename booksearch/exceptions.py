"""
Search Error Hierarchy

Every failure a search request can end in is one of these exceptions.
Each carries the HTTP status code and the user-facing message that the
pipeline turns into a JSON error body:

- InvalidRequestError: the client must fix the request (never retried)
- UpstreamUnavailable / UpstreamError: transient, never cached
- MalformedUpstreamResponse: the books API sent something unreadable
- NoItemsFound: a valid answer with no catalog at all
- InternalError: anything unexpected
"""

from __future__ import annotations


class SearchError(Exception):
    """Base error for the search service."""

    status_code: int = 500
    default_message: str = "An internal error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(SearchError):
    """Raised when the incoming request cannot be served as sent."""

    status_code = 400


class MethodOrRouteError(InvalidRequestError):
    """Raised for any method other than GET or any path other than /search."""

    status_code = 405
    default_message = "Use the GET method with /search?q=..."


class MissingQueryError(InvalidRequestError):
    """Raised when the q parameter is missing or blank."""

    status_code = 400
    default_message = "Missing parameter q."


class UpstreamUnavailable(SearchError):
    """Raised when the books API cannot be reached at all."""

    status_code = 502

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Books API error: {detail}")


class UpstreamError(SearchError):
    """
    Raised when the books API answers with a non-success status.

    Client and server error statuses are passed through as this request's
    own status; anything else becomes 502 Bad Gateway. 404 and 405 also
    become 502, since this service answers those for "no books found" and
    for a bad method or path.
    """

    RESERVED_STATUSES = frozenset({404, 405})

    def __init__(self, upstream_status: int) -> None:
        self.upstream_status = upstream_status
        passthrough = (
            400 <= upstream_status < 600
            and upstream_status not in self.RESERVED_STATUSES
        )
        self.status_code = upstream_status if passthrough else 502
        super().__init__(f"Books API status: {upstream_status}")


class MalformedUpstreamResponse(SearchError):
    """Raised when the books API payload cannot be parsed."""

    status_code = 500
    default_message = "Books API returned a malformed response."


class NoItemsFound(SearchError):
    """Raised when the books API payload has no catalog list."""

    status_code = 404
    default_message = "No books found."


class InternalError(SearchError):
    """Catch-all for unexpected failures while serving a search."""

    status_code = 500
