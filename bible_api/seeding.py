"""
Dataset Seeding

The API itself is read-only; books, chapters and verses are written here,
through the repositories, by scripts/seed_data.py.

- seed_canon(): upsert the 73 books and their chapter rows
- load_verses(): upsert verse text from records
  [{"book": 1, "chapter": 1, "verse": 1, "text": "..."}, ...]

Both are idempotent and leave committing to the caller.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from bible_api.models import Book, Testament
from bible_api.repositories import BookRepository, ChapterRepository, VerseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanonBook:
    order: int
    name: str
    testament: Testament
    chapters: int


_OLD_TESTAMENT = [
    ("Genesis", 50),
    ("Exodus", 40),
    ("Leviticus", 27),
    ("Numbers", 36),
    ("Deuteronomy", 34),
    ("Joshua", 24),
    ("Judges", 21),
    ("Ruth", 4),
    ("1 Samuel", 31),
    ("2 Samuel", 24),
    ("1 Kings", 22),
    ("2 Kings", 25),
    ("1 Chronicles", 29),
    ("2 Chronicles", 36),
    ("Ezra", 10),
    ("Nehemiah", 13),
    ("Tobit", 14),
    ("Judith", 16),
    ("Esther", 10),
    ("1 Maccabees", 16),
    ("2 Maccabees", 15),
    ("Job", 42),
    ("Psalms", 150),
    ("Proverbs", 31),
    ("Ecclesiastes", 12),
    ("Song of Songs", 8),
    ("Wisdom", 19),
    ("Sirach", 51),
    ("Isaiah", 66),
    ("Jeremiah", 52),
    ("Lamentations", 5),
    ("Baruch", 6),
    ("Ezekiel", 48),
    ("Daniel", 14),
    ("Hosea", 14),
    ("Joel", 3),
    ("Amos", 9),
    ("Obadiah", 1),
    ("Jonah", 4),
    ("Micah", 7),
    ("Nahum", 3),
    ("Habakkuk", 3),
    ("Zephaniah", 3),
    ("Haggai", 2),
    ("Zechariah", 14),
    ("Malachi", 3),
]

_NEW_TESTAMENT = [
    ("Matthew", 28),
    ("Mark", 16),
    ("Luke", 24),
    ("John", 21),
    ("Acts", 28),
    ("Romans", 16),
    ("1 Corinthians", 16),
    ("2 Corinthians", 13),
    ("Galatians", 6),
    ("Ephesians", 6),
    ("Philippians", 4),
    ("Colossians", 4),
    ("1 Thessalonians", 5),
    ("2 Thessalonians", 3),
    ("1 Timothy", 6),
    ("2 Timothy", 4),
    ("Titus", 3),
    ("Philemon", 1),
    ("Hebrews", 13),
    ("James", 5),
    ("1 Peter", 5),
    ("2 Peter", 3),
    ("1 John", 5),
    ("2 John", 1),
    ("3 John", 1),
    ("Jude", 1),
    ("Revelation", 22),
]

CANON: list[CanonBook] = [
    CanonBook(order, name, testament, chapters)
    for order, (name, chapters, testament) in enumerate(
        [(name, chapters, Testament.OLD) for name, chapters in _OLD_TESTAMENT]
        + [(name, chapters, Testament.NEW) for name, chapters in _NEW_TESTAMENT],
        start=1,
    )
]


@dataclass
class SeedReport:
    books_created: int = 0
    books_updated: int = 0
    chapters_created: int = 0
    chapters_deleted: int = 0
    verses_created: int = 0
    verses_updated: int = 0
    verses_skipped: int = 0


def seed_canon(
    session: Session,
    canon: Iterable[CanonBook] = CANON,
    report: SeedReport | None = None,
) -> SeedReport:
    """
    Make the books and chapters tables match the canon.

    Existing books are updated in place (ids are kept), missing chapter
    numbers are created and chapters beyond the canonical count are
    deleted together with their verses.
    """
    report = report or SeedReport()
    books = BookRepository(session)
    chapters = ChapterRepository(session)

    for entry in canon:
        book = books.find_by_order(entry.order)
        values = {
            "name": entry.name,
            "testament": entry.testament,
            "total_chapters": entry.chapters,
        }
        if book is None:
            book = books.create(order=entry.order, **values)
            report.books_created += 1
        elif _differs(book, values):
            books.update(book, **values)
            report.books_updated += 1

        _sync_chapters(chapters, book, entry.chapters, report)

    logger.info(
        f"Canon seeded: {report.books_created} books created, "
        f"{report.books_updated} updated, {report.chapters_created} chapters created, "
        f"{report.chapters_deleted} deleted"
    )
    return report


def _sync_chapters(
    chapters: ChapterRepository,
    book: Book,
    total: int,
    report: SeedReport,
) -> None:
    existing = {chapter.number: chapter for chapter in chapters.find_many({"book_id": book.id})}

    for number in range(1, total + 1):
        if number not in existing:
            chapters.create(book_id=book.id, number=number)
            report.chapters_created += 1

    for number, chapter in existing.items():
        if number > total:
            chapters.delete(chapter)
            report.chapters_deleted += 1


def _differs(instance: Any, values: Mapping[str, Any]) -> bool:
    return any(getattr(instance, field) != value for field, value in values.items())


def load_verses(
    session: Session,
    records: Iterable[Mapping[str, Any]],
    report: SeedReport | None = None,
) -> SeedReport:
    """
    Upsert verse text.

    Records pointing at a book or chapter that is not seeded, or missing
    a field, are skipped with a warning.
    """
    report = report or SeedReport()
    books = BookRepository(session)
    chapters = ChapterRepository(session)
    verses = VerseRepository(session)

    book_cache: dict[int, Book | None] = {}

    for record in records:
        try:
            book_order = int(record["book"])
            chapter_number = int(record["chapter"])
            verse_number = int(record["verse"])
            text = str(record["text"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping malformed verse record: {record!r}")
            report.verses_skipped += 1
            continue

        if book_order not in book_cache:
            book_cache[book_order] = books.find_by_order(book_order)
        book = book_cache[book_order]
        chapter = chapters.find_by_number(book.id, chapter_number) if book else None
        if chapter is None:
            logger.warning(f"Skipping verse {book_order}:{chapter_number}:{verse_number}, no such chapter")
            report.verses_skipped += 1
            continue

        verse = verses.find_by_number(chapter.id, verse_number)
        if verse is None:
            verses.create(chapter_id=chapter.id, number=verse_number, text=text)
            report.verses_created += 1
        elif verse.text != text:
            verses.update(verse, text=text)
            report.verses_updated += 1

    logger.info(
        f"Verses loaded: {report.verses_created} created, "
        f"{report.verses_updated} updated, {report.verses_skipped} skipped"
    )
    return report
