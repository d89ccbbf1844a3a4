"""
Chapters Router

GET .../books/{bookOrder}/chapters                  paginated chapters of a book
GET .../books/{bookOrder}/chapters/{chapterNumber}  one chapter
"""

from fastapi import APIRouter, Path, Query, Request, Response

from bible_api.config import get_settings
from bible_api.dependencies import Cache, Chapters
from bible_api.schemas import (
    ChapterEnvelope,
    ChapterListEnvelope,
    ErrorResponse,
    chapter_record,
    list_envelope,
    single_envelope,
)
from bible_api.services.cache import make_cache_key, serve_cached
from bible_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/public/bible/books/{book_order}/chapters",
    tags=["Chapters"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid parameters"},
        404: {"model": ErrorResponse, "description": "Book or chapter not found"},
    },
)


@router.get(
    "",
    response_model=ChapterListEnvelope,
    summary="List chapters of a book",
    description="Paginated chapters of a book, ordered by chapter number. "
    "An existing book without chapters returns an empty page.",
)
@limiter.limit(settings.rate_limit_public)
def list_chapters(
    request: Request,
    response: Response,
    chapters: Chapters,
    cache: Cache,
    book_order: str = Path(..., description="Canonical position (1-73)", examples=["1"]),
    page: str | None = Query(default=None, description="Page number (starts at 1)", examples=["1"]),
    limit: str | None = Query(default=None, description="Chapters per page", examples=["10"]),
) -> dict:
    """List the chapters of one book."""
    def build() -> dict:
        items, pagination = chapters.list_chapters(book_order, page, limit)
        return list_envelope([chapter_record(chapter) for chapter in items], pagination)

    cache_key = make_cache_key("bible:chapters", book_order, page=page, limit=limit)
    return serve_cached(cache, cache_key, response, build)


@router.get(
    "/{chapter_number}",
    response_model=ChapterEnvelope,
    summary="Get a chapter",
    description="Retrieve one chapter by book position and chapter number.",
)
@limiter.limit(settings.rate_limit_public)
def get_chapter(
    request: Request,
    response: Response,
    chapters: Chapters,
    cache: Cache,
    book_order: str = Path(..., description="Canonical position", examples=["1"]),
    chapter_number: str = Path(..., description="Chapter number (>= 1)", examples=["1"]),
) -> dict:
    """Get a single chapter."""
    def build() -> dict:
        return single_envelope(chapter_record(chapters.get_chapter(book_order, chapter_number)))

    cache_key = make_cache_key("bible:chapter", book_order, chapter_number)
    return serve_cached(cache, cache_key, response, build)
