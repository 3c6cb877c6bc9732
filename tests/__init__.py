"""
Test Suite for Book Search

Test Organization:
- conftest.py: Shared fixtures (fake books API, pipeline, client)
- test_analyzer.py: Word metrics
- test_catalog.py: Payload transform and ranking
- test_catalog_client.py: Books API client
- test_cache.py: Single-flight response cache
- test_pipeline.py: Search pipeline outcomes
- test_search.py: GET /search endpoint
- test_config.py: Settings validation

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=booksearch --cov-report=html

    # Run specific file
    pytest tests/test_search.py

    # Run with verbose output
    pytest -v
"""
