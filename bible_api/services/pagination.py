"""
Pagination and Parameter Validation

Shared by every resolver:

- parse_pagination(): raw `page` / `limit` query strings → PageParams
- build_pagination(): PageParams + total count → Pagination metadata
- parse_int(): string-encoded path parameters → int or None
- positive_int() / parse_book_order(): coordinate checks used before any lookup
- is_storable(): coordinates above the INTEGER column range match nothing
- fetch_page(): count + page query, skipping the page query past the end

Page arithmetic:
    Page 1 → offset 0
    Page 2 → offset limit
    Page n → offset (n - 1) * limit

    total_pages = ceil(total_items / limit), 0 when there are no items
"""

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from bible_api.exceptions import ErrorKind, ValidationError
from bible_api.models.book import FIRST_BOOK_ORDER, LAST_BOOK_ORDER
from bible_api.repositories.base import Filters, ModelT, Repository

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# Columns are 32-bit INTEGER; larger coordinates cannot match any row
MAX_STORED_INT = 2**31 - 1

# Parsed values are capped here so absurd inputs never reach int()
# with thousands of digits
INT_CEILING = 2**63 - 1

_INTEGER_RE = re.compile(r"^([+-]?)0*([0-9]+)$")


@dataclass(frozen=True)
class PageParams:
    """Validated page request."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    """Metadata returned alongside every listing."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


def parse_int(value: int | str | None) -> int | None:
    """
    Interpret a path or query value as an integer.

    Accepts ints and strings of ASCII digits such as "7" or " 12 ".
    Returns None for anything else ("abc", "1.5", "", None, booleans,
    non-ASCII digits). Magnitudes are capped at INT_CEILING.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return max(-INT_CEILING, min(value, INT_CEILING))
    if not isinstance(value, str):
        return None

    match = _INTEGER_RE.match(value.strip())
    if match is None:
        return None
    sign, digits = match.groups()
    magnitude = INT_CEILING if len(digits) > 19 else min(int(digits), INT_CEILING)
    return -magnitude if sign == "-" else magnitude


def parse_pagination(
    page: int | str | None,
    limit: int | str | None,
    *,
    default_limit: int = DEFAULT_PAGE_LIMIT,
    max_limit: int = MAX_PAGE_LIMIT,
) -> PageParams:
    """
    Validate raw pagination input.

    Missing values (None or empty string) fall back to page 1 and
    default_limit.

    Raises:
        ValidationError: INVALID_PAGINATION when page is not an integer ≥ 1
            or limit is not an integer in [1, max_limit]
    """
    parsed_page = 1 if _is_absent(page) else parse_int(page)
    if parsed_page is None or parsed_page < 1:
        raise ValidationError(
            ErrorKind.INVALID_PAGINATION,
            "Page must be a positive integer.",
        )

    parsed_limit = default_limit if _is_absent(limit) else parse_int(limit)
    if parsed_limit is None or not 1 <= parsed_limit <= max_limit:
        raise ValidationError(
            ErrorKind.INVALID_PAGINATION,
            f"Limit must be an integer between 1 and {max_limit}.",
        )

    return PageParams(page=parsed_page, limit=parsed_limit)


def build_pagination(params: PageParams, total_items: int) -> Pagination:
    """Compute pagination metadata for one page of a listing."""
    total_pages = math.ceil(total_items / params.limit) if total_items > 0 else 0
    return Pagination(
        current_page=params.page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=params.limit,
        has_next_page=params.page < total_pages,
        has_prev_page=params.page > 1,
    )


def _is_absent(value: int | str | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# =============================================================================
# Coordinate Validation
# =============================================================================
def positive_int(value: int | str | None) -> int | None:
    """Parse a chapter/verse style coordinate: an integer ≥ 1, else None."""
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return None
    return parsed


def parse_book_order(value: int | str | None) -> int | None:
    """Parse a canonical book position (1-73), else None."""
    parsed = parse_int(value)
    if parsed is None or not FIRST_BOOK_ORDER <= parsed <= LAST_BOOK_ORDER:
        return None
    return parsed


def is_storable(value: int) -> bool:
    """Whether a validated coordinate can exist in an INTEGER column."""
    return value <= MAX_STORED_INT


# =============================================================================
# Page Fetching
# =============================================================================
def fetch_page(
    repository: Repository[ModelT],
    filters: Filters,
    params: PageParams,
    order_by: Sequence[str],
) -> tuple[list[ModelT], Pagination]:
    """
    Count, then load one page of a listing.

    The page query is skipped when the offset is already past the last
    row, so pages far beyond the end (up to INT_CEILING) return an empty
    page with the real totals instead of sending an unbindable OFFSET.
    """
    total = repository.count(filters)
    if params.offset >= total:
        items = []
    else:
        items = repository.find_many(
            filters,
            offset=params.offset,
            limit=params.limit,
            order_by=order_by,
        )
    return items, build_pagination(params, total)
