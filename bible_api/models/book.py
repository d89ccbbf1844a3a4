"""
Book Model

One of the 73 canonical books. `order` is the canonical position (1-73)
and is what clients use to address a book; `id` is an opaque key.
"""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bible_api.database import Base

if TYPE_CHECKING:
    from bible_api.models.chapter import Chapter


# Canonical positions run from FIRST_BOOK_ORDER to LAST_BOOK_ORDER
FIRST_BOOK_ORDER = 1
LAST_BOOK_ORDER = 73


class Testament(str, enum.Enum):
    """Partition of the canon."""

    OLD = "OLD"
    NEW = "NEW"


class Book(Base):
    """
    Book model.

    Table: books

    Fields:
    - order: Canonical position, unique, dense 1..73
    - name: Display name
    - testament: OLD or NEW (derivable from order, stored explicitly)
    - total_chapters: Denormalized chapter count

    Relationships:
    - chapters: One-to-Many, ordered by chapter number
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint(
            f'"order" BETWEEN {FIRST_BOOK_ORDER} AND {LAST_BOOK_ORDER}',
            name="ck_books_order_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    order: Mapped[int] = mapped_column(
        Integer,
        unique=True,
        index=True,
        nullable=False,
        comment="Canonical position of the book (1-73)"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Book name"
    )

    testament: Mapped[Testament] = mapped_column(
        Enum(Testament, name="testament"),
        index=True,
        nullable=False,
    )

    total_chapters: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of chapters in the book"
    )

    chapters: Mapped[list["Chapter"]] = relationship(
        "Chapter",
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="Chapter.number",
    )

    def __repr__(self) -> str:
        return f"Book(order={self.order}, name='{self.name}', testament={self.testament.value})"
