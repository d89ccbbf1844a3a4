"""
Book Pydantic Schemas

Response-only: the API never accepts book payloads.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bible_api.models import Book, Testament
from bible_api.schemas.common import PaginationResponse


class BookResponse(BaseModel):
    """A book as returned by the API."""

    id: uuid.UUID = Field(..., description="Opaque identifier")
    order: int = Field(..., ge=1, le=73, description="Canonical position")
    name: str = Field(..., description="Book name")
    testament: Testament = Field(..., description="OLD or NEW")
    total_chapters: int = Field(..., ge=0, description="Number of chapters")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "0909fd62-060e-4960-a6f6-349ccd6420c1",
                "order": 1,
                "name": "Genesis",
                "testament": "OLD",
                "totalChapters": 50,
            }
        },
    )


class BookEnvelope(BaseModel):
    success: bool = True
    data: BookResponse


class BookListEnvelope(BaseModel):
    success: bool = True
    data: list[BookResponse]
    pagination: PaginationResponse


def book_record(book: Book) -> dict:
    """Book → JSON-ready dict."""
    return BookResponse.model_validate(book).model_dump(mode="json", by_alias=True)
