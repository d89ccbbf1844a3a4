"""
Services Package

Business logic kept apart from HTTP handling:

- pagination.py: page/limit validation, pagination metadata, coordinate checks
- books.py / chapters.py / verses.py: the Book → Chapter → Verse resolvers
- cache.py: Redis response cache with graceful degradation
- rate_limiter.py: slowapi limiter and 429 handler
"""

from bible_api.services.books import BookResolver
from bible_api.services.chapters import ChapterResolver
from bible_api.services.verses import VerseResolver

__all__ = [
    "BookResolver",
    "ChapterResolver",
    "VerseResolver",
]
