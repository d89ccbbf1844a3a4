"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() manages their lifecycle: one database session per
request, fresh resolvers bound to that session, and the process-wide cache.

Resolver wiring (leaves first):

    BookResolver(BookRepository)
      → ChapterResolver(BookResolver, ChapterRepository)
        → VerseResolver(ChapterResolver, VerseRepository)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from bible_api.config import get_settings
from bible_api.database import get_db
from bible_api.repositories import BookRepository, ChapterRepository, VerseRepository
from bible_api.services import BookResolver, ChapterResolver, VerseResolver
from bible_api.services.cache import CacheClient, get_cache

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]
Cache = Annotated[CacheClient, Depends(get_cache)]


def _page_limits() -> dict:
    settings = get_settings()
    return {
        "default_limit": settings.default_page_limit,
        "max_limit": settings.max_page_limit,
    }


# =============================================================================
# Resolvers
# =============================================================================
def get_book_resolver(db: DbSession) -> BookResolver:
    """Book resolver bound to the request's session."""
    return BookResolver(BookRepository(db), **_page_limits())


def get_chapter_resolver(
    db: DbSession,
    books: BookResolver = Depends(get_book_resolver),
) -> ChapterResolver:
    """Chapter resolver; shares the request's session with the book resolver."""
    return ChapterResolver(books, ChapterRepository(db), **_page_limits())


def get_verse_resolver(
    db: DbSession,
    chapters: ChapterResolver = Depends(get_chapter_resolver),
) -> VerseResolver:
    """Verse resolver at the bottom of the chain."""
    return VerseResolver(chapters, VerseRepository(db), **_page_limits())


Books = Annotated[BookResolver, Depends(get_book_resolver)]
Chapters = Annotated[ChapterResolver, Depends(get_chapter_resolver)]
Verses = Annotated[VerseResolver, Depends(get_verse_resolver)]
