"""
Verse Resolver

Verses are reached through book → chapter. Listing reports which level
was missing; the single-verse lookup collapses every miss into
VERSE_NOT_FOUND and only logs the level.
"""

import logging

from bible_api.exceptions import ErrorKind, NotFoundCode, NotFoundError, ValidationError
from bible_api.models import Verse
from bible_api.repositories import VerseRepository
from bible_api.services.books import INVALID_BOOK_ORDER_MESSAGE
from bible_api.services.chapters import ChapterResolver
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


class VerseResolver:
    """Validated lookups and listings over verses."""

    def __init__(
        self,
        chapters: ChapterResolver,
        verses: VerseRepository,
        *,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> None:
        self.chapters = chapters
        self.verses = verses
        self.default_limit = default_limit
        self.max_limit = max_limit

    def list_verses(
        self,
        book_order: str | int,
        chapter_number: str | int,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> tuple[list[Verse], Pagination]:
        """
        List one page of a chapter's verses.

        Raises:
            ValidationError: INVALID_BOOK_ORDER, INVALID_CHAPTER_NUMBER,
                then INVALID_PAGINATION
            NotFoundError: BOOK_NOT_FOUND or CHAPTER_NOT_FOUND
        """
        order = parse_book_order(book_order)
        if order is None:
            raise ValidationError(ErrorKind.INVALID_BOOK_ORDER, INVALID_BOOK_ORDER_MESSAGE)
        number = positive_int(chapter_number)
        if number is None:
            raise ValidationError(
                ErrorKind.INVALID_CHAPTER_NUMBER,
                "Provide a valid chapter number (>=1).",
            )
        params = parse_pagination(
            page, limit, default_limit=self.default_limit, max_limit=self.max_limit
        )

        chapter = self.chapters.resolve_chapter(order, number)

        return fetch_page(self.verses, {"chapter_id": chapter.id}, params, order_by=("number",))

    def get_verse(
        self,
        book_order: str | int,
        chapter_number: str | int,
        verse_number: str | int,
    ) -> Verse:
        """
        Fetch one verse by (book order, chapter number, verse number).

        Raises:
            ValidationError: INVALID_PARAMETERS (checked before any query)
            NotFoundError: VERSE_NOT_FOUND, whichever level is missing
        """
        order = parse_book_order(book_order)
        chapter_no = positive_int(chapter_number)
        verse_no = positive_int(verse_number)
        if order is None or chapter_no is None or verse_no is None:
            raise ValidationError(
                ErrorKind.INVALID_PARAMETERS,
                "Provide valid numbers for book, chapter, and verse.",
            )

        try:
            chapter = self.chapters.resolve_chapter(order, chapter_no)
        except NotFoundError as e:
            logger.debug(f"Verse {order}:{chapter_no}:{verse_no} unresolved: {e.code}")
            raise NotFoundError(NotFoundCode.VERSE_NOT_FOUND) from e

        verse = self.verses.find_by_number(chapter.id, verse_no) if is_storable(verse_no) else None
        if verse is None:
            logger.debug(f"Verse {order}:{chapter_no}:{verse_no} unresolved: VERSE_NOT_FOUND")
            raise NotFoundError(NotFoundCode.VERSE_NOT_FOUND)
        return verse
