"""
Book Resolver

Top of the Book → Chapter → Verse chain.

- list_books(): paginated, optionally filtered by testament, ordered by
  canonical position
- get_book_by_order(): one book by canonical position (1-73)
"""

import logging

from bible_api.exceptions import ErrorKind, NotFoundCode, NotFoundError, ValidationError
from bible_api.models import Book, Testament
from bible_api.repositories import BookRepository
from bible_api.services.pagination import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    Pagination,
    fetch_page,
    is_storable,
    parse_book_order,
    parse_pagination,
)

logger = logging.getLogger(__name__)

INVALID_BOOK_ORDER_MESSAGE = "Provide the book using its position (1-73)."


def parse_testament(value: Testament | str | None) -> Testament | None:
    """
    Validate an optional testament filter.

    None or an empty string means "no filter". Matching is exact: only
    "OLD" and "NEW" are accepted.

    Raises:
        ValidationError: INVALID_TESTAMENT for any other value
    """
    if value is None or value == "":
        return None
    try:
        return Testament(value)
    except ValueError:
        raise ValidationError(
            ErrorKind.INVALID_TESTAMENT,
            "Testament must be 'OLD' or 'NEW'",
        ) from None


class BookResolver:
    """Validated lookups and listings over books. Holds no per-call state."""

    def __init__(
        self,
        books: BookRepository,
        *,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> None:
        self.books = books
        self.default_limit = default_limit
        self.max_limit = max_limit

    def list_books(
        self,
        page: str | int | None = None,
        limit: str | int | None = None,
        testament: Testament | str | None = None,
    ) -> tuple[list[Book], Pagination]:
        """
        List one page of books.

        Pagination is validated before the testament filter. The count and
        the page are two separate queries under the same filter.

        Raises:
            ValidationError: INVALID_PAGINATION or INVALID_TESTAMENT
        """
        params = parse_pagination(
            page, limit, default_limit=self.default_limit, max_limit=self.max_limit
        )
        testament_filter = parse_testament(testament)

        filters = {"testament": testament_filter} if testament_filter else {}
        return fetch_page(self.books, filters, params, order_by=("order",))

    def get_book_by_order(self, order: str | int) -> Book:
        """
        Fetch one book by canonical position.

        Raises:
            ValidationError: INVALID_BOOK_ORDER when order is not in 1-73
                (no query is issued)
            NotFoundError: BOOK_NOT_FOUND when no book has that position
        """
        parsed = parse_book_order(order)
        if parsed is None:
            raise ValidationError(ErrorKind.INVALID_BOOK_ORDER, INVALID_BOOK_ORDER_MESSAGE)

        book = self.find_book_by_order(parsed)
        if book is None:
            raise NotFoundError(NotFoundCode.BOOK_NOT_FOUND)
        return book

    def find_book_by_order(self, order: int) -> Book | None:
        """Unvalidated lookup used by the resolvers further down the chain."""
        if not is_storable(order):
            logger.debug(f"Book order {order} out of storage range")
            return None
        book = self.books.find_by_order(order)
        if book is None:
            logger.debug(f"No book at order {order}")
        return book
