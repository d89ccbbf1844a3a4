"""
Test Suite for the Bible API

Test Organization:
- conftest.py: Shared fixtures (test database, client, fake Redis, sample books)
- test_pagination.py: Page parsing and metadata arithmetic
- test_resolvers.py: Book / chapter / verse resolvers with repository spies
- test_cache.py: CacheClient, cache keys and serve_cached
- test_books.py, test_chapters.py, test_verses.py: HTTP endpoints
- test_main.py: Root, health, request logging and rate limit envelope
- test_seeding.py: Canon seeding and verse import

Running Tests:
    pytest
    pytest --cov=bible_api --cov-report=html
    pytest tests/test_resolvers.py -v
"""
