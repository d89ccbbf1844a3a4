"""Verse Pydantic Schemas"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bible_api.models import Verse
from bible_api.schemas.common import PaginationResponse


class VerseResponse(BaseModel):
    """A verse as returned by the API."""

    id: uuid.UUID = Field(..., description="Opaque identifier")
    chapter_id: uuid.UUID = Field(..., description="Owning chapter")
    number: int = Field(..., ge=1, description="Verse number inside the chapter")
    text: str = Field(..., description="Verse text")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5b1f6a47-2b8e-4a55-9b4a-0f3f1f0c2d11",
                "chapterId": "c3a1d7a2-6a3f-4c8e-8f0e-61a4d1d2b9a0",
                "number": 1,
                "text": "In the beginning God created the heaven and the earth.",
            }
        },
    )


class VerseEnvelope(BaseModel):
    success: bool = True
    data: VerseResponse


class VerseListEnvelope(BaseModel):
    success: bool = True
    data: list[VerseResponse]
    pagination: PaginationResponse


def verse_record(verse: Verse) -> dict:
    """Verse → JSON-ready dict."""
    return VerseResponse.model_validate(verse).model_dump(mode="json", by_alias=True)
