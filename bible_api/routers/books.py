"""
Books Router

GET /api/v1/public/bible/books              paginated list, optional testament
GET /api/v1/public/bible/books/{bookOrder}  one book by canonical position

Query and path values are taken as strings and validated by the resolver,
so malformed input gets the 400 envelope instead of FastAPI's 422.
Successful responses are cached; every route is rate limited.
"""

from fastapi import APIRouter, Path, Query, Request, Response

from bible_api.config import get_settings
from bible_api.dependencies import Books, Cache
from bible_api.schemas import (
    BookEnvelope,
    BookListEnvelope,
    ErrorResponse,
    book_record,
    list_envelope,
    single_envelope,
)
from bible_api.services.cache import make_cache_key, serve_cached
from bible_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/public/bible/books",
    tags=["Books"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid parameters"},
    },
)


@router.get(
    "",
    response_model=BookListEnvelope,
    summary="List books",
    description="Paginated list of books ordered by canonical position, "
    "optionally filtered by testament.",
)
@limiter.limit(settings.rate_limit_public)
def list_books(
    request: Request,
    response: Response,
    books: Books,
    cache: Cache,
    page: str | None = Query(default=None, description="Page number (starts at 1)", examples=["1"]),
    limit: str | None = Query(default=None, description="Books per page", examples=["10"]),
    testament: str | None = Query(default=None, description="OLD or NEW", examples=["OLD"]),
) -> dict:
    """
    List books.

    Examples:
        GET /api/v1/public/bible/books?page=2&limit=10
        GET /api/v1/public/bible/books?testament=NEW
    """
    def build() -> dict:
        items, pagination = books.list_books(page, limit, testament)
        return list_envelope([book_record(book) for book in items], pagination)

    cache_key = make_cache_key("bible:books", page=page, limit=limit, testament=testament)
    return serve_cached(cache, cache_key, response, build)


@router.get(
    "/{book_order}",
    response_model=BookEnvelope,
    summary="Get a book by position",
    description="Retrieve one book by its canonical position (1-73).",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
)
@limiter.limit(settings.rate_limit_public)
def get_book(
    request: Request,
    response: Response,
    books: Books,
    cache: Cache,
    book_order: str = Path(..., description="Canonical position (1-73)", examples=["1"]),
) -> dict:
    """Get a single book by canonical position."""
    def build() -> dict:
        return single_envelope(book_record(books.get_book_by_order(book_order)))

    return serve_cached(cache, make_cache_key("bible:book", book_order), response, build)
