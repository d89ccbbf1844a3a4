"""
Verse Model
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bible_api.database import Base

if TYPE_CHECKING:
    from bible_api.models.chapter import Chapter


class Verse(Base):
    """
    Verse model.

    Table: verses

    Indexes:
    - (chapter_id, number): unique, used by the chapter → verse lookup
    """

    __tablename__ = "verses"
    __table_args__ = (
        UniqueConstraint("chapter_id", "number", name="uq_verses_chapter_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    chapter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("chapters.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Verse number inside the chapter, starting at 1"
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="verses")

    def __repr__(self) -> str:
        return f"Verse(chapter_id={self.chapter_id}, number={self.number})"
