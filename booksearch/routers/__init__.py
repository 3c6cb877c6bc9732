"""
API Routers Package

Router Structure:
- search.py: GET /search endpoint

Each router is imported and registered in main.py.
"""

from booksearch.routers.search import router as search_router

__all__ = [
    "search_router",
]
