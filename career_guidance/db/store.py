from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


logger = logging.getLogger(__name__)

# Lifecycle tags declared on ORM models via `__lifecycle__`.
# - singleton: one live row per `__singleton_key__`, replaced wholesale on save.
# - append: every save creates a new row; history is never rewritten.
SINGLETON = "singleton"
APPEND = "append"

ModelT = TypeVar("ModelT")


class StoreError(RuntimeError):
    pass


class RecordNotFoundError(StoreError):
    pass


def lifecycle_of(model: type) -> str:
    return getattr(model, "__lifecycle__", APPEND)


class RecordStore:
    """Generic single-entity persistence over an ORM session.

    Each write commits on its own; nothing spans more than one entity type.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str, model: type) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("store.%s failed model=%s error=%s", action, model.__name__, type(exc).__name__)
            raise StoreError(f"Failed to {action} {model.__name__}") from exc

    def insert(self, model: type[ModelT], record: Mapping[str, Any]) -> Any:
        row = model(**dict(record))
        self.db.add(row)
        self._commit("insert", model)
        self.db.refresh(row)
        return row.id

    def add_all(self, model: type[ModelT], records: Iterable[Mapping[str, Any]]) -> list[ModelT]:
        rows = [model(**dict(record)) for record in records]
        self.db.add_all(rows)
        self._commit("insert", model)
        for row in rows:
            self.db.refresh(row)
        return rows

    def get(self, model: type[ModelT], record_id: Any) -> ModelT | None:
        return self.db.get(model, record_id)

    def update(self, model: type[ModelT], record_id: Any, patch: Mapping[str, Any]) -> ModelT:
        row = self.get(model, record_id)
        if row is None:
            raise RecordNotFoundError(f"{model.__name__} {record_id} not found")
        for field, value in patch.items():
            setattr(row, field, value)
        self._commit("update", model)
        self.db.refresh(row)
        return row

    def query(
        self,
        model: type[ModelT],
        filters: Mapping[str, Any] | None = None,
        order: Sequence[Any] | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        q = self.db.query(model)
        for field, value in (filters or {}).items():
            q = q.filter(getattr(model, field) == value)
        if order:
            q = q.order_by(*order)
        if limit is not None:
            q = q.limit(limit)
        try:
            return list(q.all())
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to query {model.__name__}") from exc

    def query_one(
        self,
        model: type[ModelT],
        filters: Mapping[str, Any] | None = None,
        order: Sequence[Any] | None = None,
    ) -> ModelT | None:
        rows = self.query(model, filters, order, limit=1)
        return rows[0] if rows else None

    def save(self, model: type[ModelT], record: Mapping[str, Any]) -> ModelT:
        """Persist `record` according to the model's lifecycle tag."""

        if lifecycle_of(model) == SINGLETON:
            key = model.__singleton_key__
            existing = self.query_one(model, {key: record[key]})
            if existing is not None:
                for field, value in record.items():
                    setattr(existing, field, value)
                self._commit("replace", model)
                self.db.refresh(existing)
                return existing

        row = model(**dict(record))
        self.db.add(row)
        self._commit("insert", model)
        self.db.refresh(row)
        return row
