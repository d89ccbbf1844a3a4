"""Verse data access."""

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from bible_api.models import Verse
from bible_api.repositories.base import Filters, ModelQuery


class VerseRepository:
    """Verses, ordered by number unless told otherwise."""

    def __init__(self, session: Session) -> None:
        self._query = ModelQuery(session, Verse, default_order_by=("number",))

    def find_many(
        self,
        filters: Filters | None = None,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: Sequence[str] | None = None,
    ) -> list[Verse]:
        return self._query.find_many(filters, offset=offset, limit=limit, order_by=order_by)

    def count(self, filters: Filters | None = None) -> int:
        return self._query.count(filters)

    def find_one(self, filters: Filters) -> Verse | None:
        return self._query.find_one(filters)

    def get(self, id: uuid.UUID) -> Verse | None:
        return self._query.get(id)

    def create(self, **values: Any) -> Verse:
        return self._query.create(**values)

    def update(self, instance: Verse, **values: Any) -> Verse:
        return self._query.update(instance, **values)

    def delete(self, instance: Verse) -> None:
        self._query.delete(instance)

    def find_by_number(self, chapter_id: uuid.UUID, number: int) -> Verse | None:
        """Fetch one verse of a chapter."""
        return self._query.find_one({"chapter_id": chapter_id, "number": number})
