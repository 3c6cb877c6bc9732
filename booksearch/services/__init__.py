"""
Services Package

This package contains the search logic, kept separate from HTTP handling
so each piece can be tested in isolation.

Current services:
- analyzer.py: Word metrics for a description
- catalog.py: Books API payload to ranked SearchResult
- catalog_client.py: httpx client for the books API
- cache.py: In-process result cache with single-flight misses
- pipeline.py: Validate, cache, fetch, transform, respond
"""
