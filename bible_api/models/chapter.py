"""
Chapter Model

Chapters are numbered 1..N inside their book.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bible_api.database import Base

if TYPE_CHECKING:
    from bible_api.models.book import Book
    from bible_api.models.verse import Verse


class Chapter(Base):
    """
    Chapter model.

    Table: chapters

    Indexes:
    - (book_id, number): unique, used by the book → chapter lookup
    """

    __tablename__ = "chapters"
    __table_args__ = (
        UniqueConstraint("book_id", "number", name="uq_chapters_book_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    book_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Chapter number inside the book, starting at 1"
    )

    book: Mapped["Book"] = relationship("Book", back_populates="chapters")

    verses: Mapped[list["Verse"]] = relationship(
        "Verse",
        back_populates="chapter",
        cascade="all, delete-orphan",
        order_by="Verse.number",
    )

    def __repr__(self) -> str:
        return f"Chapter(book_id={self.book_id}, number={self.number})"
