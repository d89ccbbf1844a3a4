"""Chapter Pydantic Schemas"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bible_api.models import Chapter
from bible_api.schemas.common import PaginationResponse


class ChapterResponse(BaseModel):
    """A chapter as returned by the API."""

    id: uuid.UUID = Field(..., description="Opaque identifier")
    book_id: uuid.UUID = Field(..., description="Owning book")
    number: int = Field(..., ge=1, description="Chapter number inside the book")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ChapterEnvelope(BaseModel):
    success: bool = True
    data: ChapterResponse


class ChapterListEnvelope(BaseModel):
    success: bool = True
    data: list[ChapterResponse]
    pagination: PaginationResponse


def chapter_record(chapter: Chapter) -> dict:
    """Chapter → JSON-ready dict."""
    return ChapterResponse.model_validate(chapter).model_dump(mode="json", by_alias=True)
