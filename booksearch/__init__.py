"""
Book Search Application Package

A small FastAPI front-end that forwards a search query to an external
books API, ranks the returned catalog by simple text metrics and caches
the result per query.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- exceptions.py: Typed search errors and their HTTP status codes
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- schemas/: Pydantic response schemas
- routers/: API route handlers
- services/: Analyzer, catalog transform, books API client, cache, pipeline
"""

__version__ = "0.1.0"
