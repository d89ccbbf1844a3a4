"""
Data Access Building Blocks

Repository
==========
The capability set every entity repository offers, expressed as a
typing.Protocol so repositories conform structurally instead of sharing a
base class:

    find_many(filters, offset, limit, order_by) -> list[T]
    count(filters) -> int
    find_one(filters) -> T | None
    get(id) -> T | None
    create(**values) -> T
    update(instance, **values) -> T
    delete(instance) -> None

ModelQuery
==========
A small SQLAlchemy helper that implements those operations for one mapped
class. Repositories hold a ModelQuery and delegate to it.

Filters are plain equality mappings ({"book_id": ..., "number": 3}).
order_by is a sequence of column names; a leading "-" sorts descending.

Every SQLAlchemyError is logged and re-raised as StorageError, so callers
never see driver-specific exceptions.
"""

import logging
import uuid
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bible_api.exceptions import StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

Filters = Mapping[str, Any]


class Repository(Protocol[ModelT]):
    """Read/list/count plus create/update/delete for one entity type."""

    def find_many(
        self,
        filters: Filters | None = None,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: Sequence[str] | None = None,
    ) -> list[ModelT]: ...

    def count(self, filters: Filters | None = None) -> int: ...

    def find_one(self, filters: Filters) -> ModelT | None: ...

    def get(self, id: uuid.UUID) -> ModelT | None: ...

    def create(self, **values: Any) -> ModelT: ...

    def update(self, instance: ModelT, **values: Any) -> ModelT: ...

    def delete(self, instance: ModelT) -> None: ...


class ModelQuery(Generic[ModelT]):
    """SQLAlchemy implementation of the repository operations for one model."""

    def __init__(
        self,
        session: Session,
        model: type[ModelT],
        default_order_by: Sequence[str] = (),
    ) -> None:
        self.session = session
        self.model = model
        self.default_order_by = tuple(default_order_by)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def find_many(
        self,
        filters: Filters | None = None,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: Sequence[str] | None = None,
    ) -> list[ModelT]:
        stmt = select(self.model).where(*self._criteria(filters))
        stmt = stmt.order_by(*self._order_clauses(order_by))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        with self._storage_errors("list"):
            return list(self.session.execute(stmt).scalars().all())

    def count(self, filters: Filters | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*self._criteria(filters))
        )
        with self._storage_errors("count"):
            return self.session.execute(stmt).scalar() or 0

    def find_one(self, filters: Filters) -> ModelT | None:
        stmt = select(self.model).where(*self._criteria(filters))
        with self._storage_errors("look up"):
            return self.session.execute(stmt).scalar_one_or_none()

    def get(self, id: uuid.UUID) -> ModelT | None:
        with self._storage_errors("look up"):
            return self.session.get(self.model, id)

    # -------------------------------------------------------------------------
    # Writes (seeding and administration only; callers commit)
    # -------------------------------------------------------------------------
    def create(self, **values: Any) -> ModelT:
        instance = self.model(**values)
        with self._storage_errors("create", rollback=True):
            self.session.add(instance)
            self.session.flush()
        return instance

    def update(self, instance: ModelT, **values: Any) -> ModelT:
        for field, value in values.items():
            setattr(instance, field, value)
        with self._storage_errors("update", rollback=True):
            self.session.flush()
        return instance

    def delete(self, instance: ModelT) -> None:
        with self._storage_errors("delete", rollback=True):
            self.session.delete(instance)
            self.session.flush()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _criteria(self, filters: Filters | None) -> list:
        return [getattr(self.model, name) == value for name, value in (filters or {}).items()]

    def _order_clauses(self, order_by: Sequence[str] | None) -> list:
        clauses = []
        for name in order_by or self.default_order_by:
            column = getattr(self.model, name.lstrip("-"))
            clauses.append(column.desc() if name.startswith("-") else column.asc())
        return clauses

    @contextmanager
    def _storage_errors(self, action: str, rollback: bool = False) -> Iterator[None]:
        table = self.model.__tablename__
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"Database error while trying to {action} {table}: {e}")
            if rollback:
                self.session.rollback()
            raise StorageError(f"Failed to {action} {table}") from e
