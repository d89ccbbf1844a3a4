"""
Error Taxonomy

Three outcomes besides success, kept as separate exception classes so they
are never confused:

- ValidationError: malformed or out-of-domain input. Raised before any
  query is issued. Mapped to HTTP 400 with a machine-readable code.
- NotFoundError: well-formed input naming a resource that does not exist
  at some level of the Book → Chapter → Verse tree. Mapped to HTTP 404.
- StorageError: the database failed. The backend detail stays in the logs;
  clients get an opaque HTTP 500.

The exception handlers that build the JSON envelopes live in main.py.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable validation failure kinds."""

    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_TESTAMENT = "INVALID_TESTAMENT"
    INVALID_BOOK_ORDER = "INVALID_BOOK_ORDER"
    INVALID_CHAPTER_NUMBER = "INVALID_CHAPTER_NUMBER"
    INVALID_PARAMETERS = "INVALID_PARAMETERS"


class NotFoundCode(str, Enum):
    """Which resource the caller could not obtain."""

    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
    CHAPTER_NOT_FOUND = "CHAPTER_NOT_FOUND"
    VERSE_NOT_FOUND = "VERSE_NOT_FOUND"


class BibleAPIError(Exception):
    """Base class for every error raised by the resolvers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BibleAPIError):
    """Input rejected before touching the data store."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.value


class NotFoundError(BibleAPIError):
    """Valid coordinates, but no such resource."""

    _default_messages = {
        NotFoundCode.BOOK_NOT_FOUND: "Book not found.",
        NotFoundCode.CHAPTER_NOT_FOUND: "Chapter not found.",
        NotFoundCode.VERSE_NOT_FOUND: "Verse not found.",
    }

    def __init__(self, code: NotFoundCode, message: str | None = None) -> None:
        super().__init__(message or self._default_messages[code])
        self.not_found_code = code

    @property
    def code(self) -> str:
        return self.not_found_code.value


class StorageError(BibleAPIError):
    """The data-access layer failed (connectivity, timeout, constraint)."""
