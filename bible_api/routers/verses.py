"""
Verses Router

GET .../chapters/{chapterNumber}/verses                paginated verses of a chapter
GET .../chapters/{chapterNumber}/verses/{verseNumber}  one verse
"""

from fastapi import APIRouter, Path, Query, Request, Response

from bible_api.config import get_settings
from bible_api.dependencies import Cache, Verses
from bible_api.schemas import (
    ErrorResponse,
    VerseEnvelope,
    VerseListEnvelope,
    list_envelope,
    single_envelope,
    verse_record,
)
from bible_api.services.cache import make_cache_key, serve_cached
from bible_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/public/bible/books/{book_order}/chapters/{chapter_number}/verses",
    tags=["Verses"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid parameters"},
        404: {"model": ErrorResponse, "description": "Book, chapter or verse not found"},
    },
)


@router.get(
    "",
    response_model=VerseListEnvelope,
    summary="List verses of a chapter",
    description="Paginated verses of a chapter, ordered by verse number.",
)
@limiter.limit(settings.rate_limit_public)
def list_verses(
    request: Request,
    response: Response,
    verses: Verses,
    cache: Cache,
    book_order: str = Path(..., description="Canonical position (1-73)", examples=["1"]),
    chapter_number: str = Path(..., description="Chapter number (>= 1)", examples=["1"]),
    page: str | None = Query(default=None, description="Page number (starts at 1)", examples=["1"]),
    limit: str | None = Query(default=None, description="Verses per page", examples=["10"]),
) -> dict:
    """List the verses of one chapter."""
    def build() -> dict:
        items, pagination = verses.list_verses(book_order, chapter_number, page, limit)
        return list_envelope([verse_record(verse) for verse in items], pagination)

    cache_key = make_cache_key("bible:verses", book_order, chapter_number, page=page, limit=limit)
    return serve_cached(cache, cache_key, response, build)


@router.get(
    "/{verse_number}",
    response_model=VerseEnvelope,
    summary="Get a verse",
    description="Retrieve one verse by book position, chapter number and verse number.",
)
@limiter.limit(settings.rate_limit_public)
def get_verse(
    request: Request,
    response: Response,
    verses: Verses,
    cache: Cache,
    book_order: str = Path(..., description="Canonical position (1-73)", examples=["1"]),
    chapter_number: str = Path(..., description="Chapter number (>= 1)", examples=["1"]),
    verse_number: str = Path(..., description="Verse number (>= 1)", examples=["1"]),
) -> dict:
    """Get a single verse."""
    def build() -> dict:
        verse = verses.get_verse(book_order, chapter_number, verse_number)
        return single_envelope(verse_record(verse))

    cache_key = make_cache_key("bible:verse", book_order, chapter_number, verse_number)
    return serve_cached(cache, cache_key, response, build)
