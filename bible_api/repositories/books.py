"""Book data access."""

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from bible_api.models import Book
from bible_api.repositories.base import Filters, ModelQuery


class BookRepository:
    """Books, ordered by canonical position unless told otherwise."""

    def __init__(self, session: Session) -> None:
        self._query = ModelQuery(session, Book, default_order_by=("order",))

    def find_many(
        self,
        filters: Filters | None = None,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: Sequence[str] | None = None,
    ) -> list[Book]:
        return self._query.find_many(filters, offset=offset, limit=limit, order_by=order_by)

    def count(self, filters: Filters | None = None) -> int:
        return self._query.count(filters)

    def find_one(self, filters: Filters) -> Book | None:
        return self._query.find_one(filters)

    def get(self, id: uuid.UUID) -> Book | None:
        return self._query.get(id)

    def create(self, **values: Any) -> Book:
        return self._query.create(**values)

    def update(self, instance: Book, **values: Any) -> Book:
        return self._query.update(instance, **values)

    def delete(self, instance: Book) -> None:
        self._query.delete(instance)

    def find_by_order(self, order: int) -> Book | None:
        """Fetch a book by its canonical position."""
        return self._query.find_one({"order": order})
