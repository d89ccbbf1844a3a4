"""
Pydantic Schemas Package

Response schemas and the pure Entity → dict mapping functions used by the
routers. SQLAlchemy models are never returned directly.

Schema Naming Convention:
- XxxResponse: Fields of one entity in API responses
- XxxEnvelope / XxxListEnvelope: The {success, data, pagination} wrapper
- xxx_record(): Entity → JSON-ready dict
"""

from bible_api.schemas.book import BookEnvelope, BookListEnvelope, BookResponse, book_record
from bible_api.schemas.chapter import (
    ChapterEnvelope,
    ChapterListEnvelope,
    ChapterResponse,
    chapter_record,
)
from bible_api.schemas.common import (
    ErrorResponse,
    PaginationResponse,
    list_envelope,
    pagination_record,
    single_envelope,
)
from bible_api.schemas.verse import VerseEnvelope, VerseListEnvelope, VerseResponse, verse_record

__all__ = [
    # Shared
    "ErrorResponse",
    "PaginationResponse",
    "list_envelope",
    "pagination_record",
    "single_envelope",
    # Book
    "BookEnvelope",
    "BookListEnvelope",
    "BookResponse",
    "book_record",
    # Chapter
    "ChapterEnvelope",
    "ChapterListEnvelope",
    "ChapterResponse",
    "chapter_record",
    # Verse
    "VerseEnvelope",
    "VerseListEnvelope",
    "VerseResponse",
    "verse_record",
]
