"""
Chapter Resolver

Chapters are always reached through their book: the book is resolved
first and a missing book stops the chain before any chapter query.
"""

import logging

from bible_api.exceptions import ErrorKind, NotFoundCode, NotFoundError, ValidationError
from bible_api.models import Chapter
from bible_api.repositories import ChapterRepository
from bible_api.services.books import INVALID_BOOK_ORDER_MESSAGE, BookResolver
from bible_api.services.pagination import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    Pagination,
    fetch_page,
    is_storable,
    parse_book_order,
    parse_pagination,
    positive_int,
)

logger = logging.getLogger(__name__)


class ChapterResolver:
    """Validated lookups and listings over chapters."""

    def __init__(
        self,
        books: BookResolver,
        chapters: ChapterRepository,
        *,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> None:
        self.books = books
        self.chapters = chapters
        self.default_limit = default_limit
        self.max_limit = max_limit

    def list_chapters(
        self,
        book_order: str | int,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> tuple[list[Chapter], Pagination]:
        """
        List one page of a book's chapters.

        A book with no chapters yields an empty page (total_items == 0);
        a book that does not exist raises BOOK_NOT_FOUND instead.

        Raises:
            ValidationError: INVALID_BOOK_ORDER, then INVALID_PAGINATION
            NotFoundError: BOOK_NOT_FOUND
        """
        order = parse_book_order(book_order)
        if order is None:
            raise ValidationError(ErrorKind.INVALID_BOOK_ORDER, INVALID_BOOK_ORDER_MESSAGE)
        params = parse_pagination(
            page, limit, default_limit=self.default_limit, max_limit=self.max_limit
        )

        book = self.books.find_book_by_order(order)
        if book is None:
            raise NotFoundError(NotFoundCode.BOOK_NOT_FOUND)

        return fetch_page(self.chapters, {"book_id": book.id}, params, order_by=("number",))

    def get_chapter(self, book_order: str | int, chapter_number: str | int) -> Chapter:
        """
        Fetch one chapter by (book order, chapter number).

        Both coordinates must be positive integers. Whether the book or the
        chapter is missing, callers get CHAPTER_NOT_FOUND.

        Raises:
            ValidationError: INVALID_PARAMETERS
            NotFoundError: CHAPTER_NOT_FOUND
        """
        order = positive_int(book_order)
        number = positive_int(chapter_number)
        if order is None or number is None:
            raise ValidationError(
                ErrorKind.INVALID_PARAMETERS,
                "Provide valid numbers for book and chapter.",
            )

        try:
            return self.resolve_chapter(order, number)
        except NotFoundError as e:
            logger.debug(f"Chapter {order}:{number} unresolved: {e.code}")
            raise NotFoundError(NotFoundCode.CHAPTER_NOT_FOUND) from e

    def resolve_chapter(self, book_order: int, chapter_number: int) -> Chapter:
        """
        Walk book → chapter for already-validated coordinates.

        Raises:
            NotFoundError: tagged with the level that is missing
                (BOOK_NOT_FOUND or CHAPTER_NOT_FOUND)
        """
        book = self.books.find_book_by_order(book_order)
        if book is None:
            raise NotFoundError(NotFoundCode.BOOK_NOT_FOUND)

        chapter = None
        if is_storable(chapter_number):
            chapter = self.chapters.find_by_number(book.id, chapter_number)
        if chapter is None:
            raise NotFoundError(NotFoundCode.CHAPTER_NOT_FOUND)
        return chapter
