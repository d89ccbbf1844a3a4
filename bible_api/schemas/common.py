"""
Shared Response Schemas

Every response uses the same envelope:

    success:  {"success": true, "data": ...}
    listing:  {"success": true, "data": [...], "pagination": {...}}
    error:    {"success": false, "error": "...", "code": "..."}

JSON keys are camelCase throughout: pagination metadata (currentPage,
totalPages, ...) and entity fields (totalChapters, bookId, chapterId).
Python attribute names stay snake_case.
"""

from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bible_api.services.pagination import Pagination


class PaginationResponse(BaseModel):
    """Pagination metadata for listings."""

    current_page: int = Field(..., ge=1, description="Current page number")
    total_pages: int = Field(..., ge=0, description="Total number of pages")
    total_items: int = Field(..., ge=0, description="Total number of items")
    items_per_page: int = Field(..., ge=1, description="Page size")
    has_next_page: bool = Field(..., description="Whether a later page exists")
    has_prev_page: bool = Field(..., description="Whether an earlier page exists")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "currentPage": 1,
                "totalPages": 7,
                "totalItems": 66,
                "itemsPerPage": 10,
                "hasNextPage": True,
                "hasPrevPage": False,
            }
        },
    )


class ErrorResponse(BaseModel):
    """Body of 400 / 404 responses."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Human-readable message")
    code: str | None = Field(default=None, description="Machine-readable code")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Provide the book using its position (1-73).",
                "code": "INVALID_BOOK_ORDER",
            }
        },
    )


def pagination_record(pagination: Pagination) -> dict:
    """Pagination metadata → camelCase JSON-ready dict."""
    return PaginationResponse(**asdict(pagination)).model_dump(mode="json", by_alias=True)


def single_envelope(record: dict) -> dict:
    return {"success": True, "data": record}


def list_envelope(records: list[dict], pagination: Pagination) -> dict:
    return {
        "success": True,
        "data": records,
        "pagination": pagination_record(pagination),
    }
