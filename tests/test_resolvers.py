"""
Tests for the Book → Chapter → Verse resolvers.

Repositories are wrapped in MagicMock(wraps=...) spies so tests can check
not only what a resolver returns but which queries it issued.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from bible_api.exceptions import (
    ErrorKind,
    NotFoundCode,
    NotFoundError,
    StorageError,
    ValidationError,
)
from bible_api.models import Testament
from bible_api.repositories import BookRepository, ChapterRepository, VerseRepository
from bible_api.services import BookResolver, ChapterResolver, VerseResolver

OVERSIZED = "99999999999999999999"


@pytest.fixture
def repos(db_session: Session) -> dict[str, MagicMock]:
    return {
        "books": MagicMock(wraps=BookRepository(db_session)),
        "chapters": MagicMock(wraps=ChapterRepository(db_session)),
        "verses": MagicMock(wraps=VerseRepository(db_session)),
    }


@pytest.fixture
def book_resolver(repos) -> BookResolver:
    return BookResolver(repos["books"])


@pytest.fixture
def chapter_resolver(repos, book_resolver) -> ChapterResolver:
    return ChapterResolver(book_resolver, repos["chapters"])


@pytest.fixture
def verse_resolver(repos, chapter_resolver) -> VerseResolver:
    return VerseResolver(chapter_resolver, repos["verses"])


def _failing_session() -> MagicMock:
    session = MagicMock(spec=Session)
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    return session


# =============================================================================
# BookResolver
# =============================================================================


class TestListBooks:
    """Tests for BookResolver.list_books()."""

    def test_first_page_ordered(self, book_resolver, canon_books):
        books, pagination = book_resolver.list_books()

        assert [b.order for b in books] == list(range(1, 11))
        assert pagination.total_items == 73
        assert pagination.total_pages == 8
        assert pagination.has_next_page is True

    def test_last_page(self, book_resolver, canon_books):
        books, pagination = book_resolver.list_books(page="8", limit="10")

        assert [b.order for b in books] == [71, 72, 73]
        assert pagination.has_next_page is False
        assert pagination.has_prev_page is True

    def test_page_past_the_end_is_empty(self, book_resolver, canon_books):
        books, pagination = book_resolver.list_books(page="20")

        assert books == []
        assert pagination.total_items == 73

    def test_oversized_page_is_empty(self, book_resolver, repos, canon_books):
        """Past the end by more than any OFFSET can hold: no page query."""
        books, pagination = book_resolver.list_books(page=OVERSIZED)

        assert books == []
        assert pagination.total_items == 73
        assert pagination.total_pages == 8
        assert pagination.has_next_page is False
        repos["books"].find_many.assert_not_called()

    def test_testament_filter_applies_to_count(self, book_resolver, canon_books):
        """The total reflects the filter, not the whole table."""
        books, pagination = book_resolver.list_books(limit="100", testament="NEW")

        assert len(books) == 27
        assert all(b.testament == Testament.NEW for b in books)
        assert books[0].order == 47
        assert pagination.total_items == 27
        assert pagination.total_pages == 1

    def test_old_testament(self, book_resolver, canon_books):
        _, pagination = book_resolver.list_books(testament="OLD")

        assert pagination.total_items == 46
        assert pagination.total_pages == 5

    def test_empty_testament_means_no_filter(self, book_resolver, canon_books):
        _, pagination = book_resolver.list_books(testament="")

        assert pagination.total_items == 73

    @pytest.mark.parametrize("testament", ["old", "Old", "OLDER", "both"])
    def test_testament_match_is_exact(self, book_resolver, testament):
        with pytest.raises(ValidationError) as exc_info:
            book_resolver.list_books(testament=testament)

        assert exc_info.value.kind == ErrorKind.INVALID_TESTAMENT
        assert exc_info.value.message == "Testament must be 'OLD' or 'NEW'"

    def test_pagination_checked_before_testament(self, book_resolver):
        with pytest.raises(ValidationError) as exc_info:
            book_resolver.list_books(page="0", testament="bad")

        assert exc_info.value.kind == ErrorKind.INVALID_PAGINATION

    def test_validation_issues_no_query(self, book_resolver, repos):
        with pytest.raises(ValidationError):
            book_resolver.list_books(limit="500")

        assert repos["books"].method_calls == []

    def test_repeated_calls_are_identical(self, book_resolver, canon_books):
        first = book_resolver.list_books(page="2", limit="5", testament="OLD")
        second = book_resolver.list_books(page="2", limit="5", testament="OLD")

        assert [b.id for b in first[0]] == [b.id for b in second[0]]
        assert first[1] == second[1]


class TestGetBookByOrder:
    """Tests for BookResolver.get_book_by_order()."""

    @pytest.mark.parametrize("order", ["1", 1])
    def test_found(self, book_resolver, genesis, order):
        assert book_resolver.get_book_by_order(order).name == "Genesis"

    @pytest.mark.parametrize("order", ["1", "73"])
    def test_canon_boundaries(self, book_resolver, canon_books, order):
        assert book_resolver.get_book_by_order(order).order == int(order)

    @pytest.mark.parametrize("order", ["0", "74", "-1", "abc", ""])
    def test_invalid_order(self, book_resolver, repos, order):
        with pytest.raises(ValidationError) as exc_info:
            book_resolver.get_book_by_order(order)

        assert exc_info.value.kind == ErrorKind.INVALID_BOOK_ORDER
        assert exc_info.value.message == "Provide the book using its position (1-73)."
        assert repos["books"].method_calls == []

    def test_not_found(self, book_resolver, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            book_resolver.get_book_by_order("73")

        assert exc_info.value.not_found_code == NotFoundCode.BOOK_NOT_FOUND

    def test_storage_failure_is_wrapped(self):
        resolver = BookResolver(BookRepository(_failing_session()))

        with pytest.raises(StorageError) as exc_info:
            resolver.get_book_by_order("1")

        assert "connection refused" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OperationalError)


# =============================================================================
# ChapterResolver
# =============================================================================


class TestListChapters:
    """Tests for ChapterResolver.list_chapters()."""

    def test_chapters_in_order(self, chapter_resolver, genesis):
        chapters, pagination = chapter_resolver.list_chapters("1")

        assert [c.number for c in chapters] == [1, 2, 3]
        assert all(c.book_id == genesis.id for c in chapters)
        assert pagination.total_items == 3
        assert pagination.total_pages == 1

    def test_paged(self, chapter_resolver, genesis):
        chapters, pagination = chapter_resolver.list_chapters("1", page="2", limit="2")

        assert [c.number for c in chapters] == [3]
        assert pagination.has_prev_page is True
        assert pagination.has_next_page is False

    def test_book_without_chapters_is_empty_not_missing(self, chapter_resolver, exodus):
        chapters, pagination = chapter_resolver.list_chapters("2")

        assert chapters == []
        assert pagination.total_items == 0
        assert pagination.total_pages == 0

    def test_missing_book(self, chapter_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            chapter_resolver.list_chapters("5")

        assert exc_info.value.not_found_code == NotFoundCode.BOOK_NOT_FOUND
        assert repos["chapters"].method_calls == []

    def test_book_order_checked_before_pagination(self, chapter_resolver):
        with pytest.raises(ValidationError) as exc_info:
            chapter_resolver.list_chapters("74", page="0")

        assert exc_info.value.kind == ErrorKind.INVALID_BOOK_ORDER

    def test_invalid_pagination(self, chapter_resolver, genesis):
        with pytest.raises(ValidationError) as exc_info:
            chapter_resolver.list_chapters("1", limit="101")

        assert exc_info.value.kind == ErrorKind.INVALID_PAGINATION


class TestGetChapter:
    """Tests for ChapterResolver.get_chapter()."""

    def test_found(self, chapter_resolver, genesis):
        chapter = chapter_resolver.get_chapter("1", "2")

        assert chapter.number == 2
        assert chapter.book_id == genesis.id

    def test_missing_chapter(self, chapter_resolver, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            chapter_resolver.get_chapter("1", "99")

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND

    def test_missing_book_skips_chapter_query(self, chapter_resolver, repos, genesis):
        """Book 999 is well-formed but absent: no chapter lookup happens."""
        with pytest.raises(NotFoundError) as exc_info:
            chapter_resolver.get_chapter(999, 1)

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND
        repos["books"].find_by_order.assert_called_once_with(999)
        assert repos["chapters"].method_calls == []

    def test_oversized_chapter_skips_chapter_query(self, chapter_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            chapter_resolver.get_chapter("1", OVERSIZED)

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND
        repos["chapters"].find_by_number.assert_not_called()

    def test_oversized_book_skips_book_query(self, chapter_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            chapter_resolver.get_chapter(OVERSIZED, "1")

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND
        assert repos["books"].method_calls == []
        assert repos["chapters"].method_calls == []

    @pytest.mark.parametrize("book, chapter", [("0", "1"), ("1", "0"), ("x", "1"), ("1", "-3")])
    def test_invalid_coordinates(self, chapter_resolver, repos, book, chapter):
        with pytest.raises(ValidationError) as exc_info:
            chapter_resolver.get_chapter(book, chapter)

        assert exc_info.value.kind == ErrorKind.INVALID_PARAMETERS
        assert exc_info.value.message == "Provide valid numbers for book and chapter."
        assert repos["books"].method_calls == []


# =============================================================================
# VerseResolver
# =============================================================================


class TestListVerses:
    """Tests for VerseResolver.list_verses()."""

    def test_verses_in_order(self, verse_resolver, genesis):
        verses, pagination = verse_resolver.list_verses("1", "1")

        assert [v.number for v in verses] == [1, 2, 3]
        assert pagination.total_items == 3

    def test_paged(self, verse_resolver, genesis):
        verses, pagination = verse_resolver.list_verses("1", "1", page="2", limit="2")

        assert [v.number for v in verses] == [3]
        assert pagination.total_pages == 2
        assert pagination.has_prev_page is True

    def test_chapter_without_verses(self, verse_resolver, genesis):
        verses, pagination = verse_resolver.list_verses("1", "3")

        assert verses == []
        assert pagination.total_pages == 0

    def test_missing_book(self, verse_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            verse_resolver.list_verses("9", "1")

        assert exc_info.value.not_found_code == NotFoundCode.BOOK_NOT_FOUND
        assert repos["chapters"].method_calls == []
        assert repos["verses"].method_calls == []

    def test_missing_chapter(self, verse_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            verse_resolver.list_verses("1", "9")

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND
        assert repos["verses"].method_calls == []

    def test_oversized_chapter(self, verse_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            verse_resolver.list_verses("1", OVERSIZED)

        assert exc_info.value.not_found_code == NotFoundCode.CHAPTER_NOT_FOUND
        assert repos["verses"].method_calls == []

    @pytest.mark.parametrize(
        "book, chapter, page, kind",
        [
            ("74", "0", "0", ErrorKind.INVALID_BOOK_ORDER),
            ("1", "0", "0", ErrorKind.INVALID_CHAPTER_NUMBER),
            ("1", "abc", None, ErrorKind.INVALID_CHAPTER_NUMBER),
            ("1", "1", "0", ErrorKind.INVALID_PAGINATION),
        ],
    )
    def test_validation_order(self, verse_resolver, book, chapter, page, kind):
        with pytest.raises(ValidationError) as exc_info:
            verse_resolver.list_verses(book, chapter, page=page)

        assert exc_info.value.kind == kind


class TestGetVerse:
    """Tests for VerseResolver.get_verse()."""

    def test_found(self, verse_resolver, genesis):
        verse = verse_resolver.get_verse("1", "1", "3")

        assert verse.number == 3
        assert verse.text.startswith("And God said")

    @pytest.mark.parametrize("coordinates", [("1", "1", "99"), ("1", "9", "1"), ("9", "1", "1")])
    def test_any_miss_is_verse_not_found(self, verse_resolver, genesis, coordinates):
        with pytest.raises(NotFoundError) as exc_info:
            verse_resolver.get_verse(*coordinates)

        assert exc_info.value.not_found_code == NotFoundCode.VERSE_NOT_FOUND

    def test_missing_chapter_skips_verse_query(self, verse_resolver, repos, genesis):
        with pytest.raises(NotFoundError):
            verse_resolver.get_verse("1", "9", "1")

        assert repos["verses"].method_calls == []

    def test_oversized_verse_skips_verse_query(self, verse_resolver, repos, genesis):
        with pytest.raises(NotFoundError) as exc_info:
            verse_resolver.get_verse("1", "1", OVERSIZED)

        assert exc_info.value.not_found_code == NotFoundCode.VERSE_NOT_FOUND
        assert repos["verses"].method_calls == []

    @pytest.mark.parametrize(
        "coordinates",
        [("0", "1", "1"), ("74", "1", "1"), ("1", "0", "1"), ("1", "1", "0"), ("a", "b", "c")],
    )
    def test_invalid_coordinates(self, verse_resolver, repos, coordinates):
        with pytest.raises(ValidationError) as exc_info:
            verse_resolver.get_verse(*coordinates)

        assert exc_info.value.kind == ErrorKind.INVALID_PARAMETERS
        assert exc_info.value.message == "Provide valid numbers for book, chapter, and verse."
        assert repos["books"].method_calls == []
