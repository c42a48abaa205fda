"""Table gateway: paged listing and single-shot mutations against one table."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, NoReturn, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class GatewayError(Exception):
    """A store call failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordNotFoundError(GatewayError):
    """No row with the requested id."""


class TableGateway(Generic[ModelT]):
    """List/create/update/delete against one table, ordered by creation time."""

    def __init__(self, db: Session, model: type[ModelT]) -> None:
        self.db = db
        self.model = model
        self.table_name = model.__tablename__

    def list_page(self, page: int, page_size: int) -> tuple[list[ModelT], int]:
        """Return one page ordered by ``created_at`` descending, plus the total row count."""

        if page < 1 or page_size < 1:
            raise GatewayError("Page and page size must be positive")
        offset = (page - 1) * page_size
        try:
            total = int(self.db.scalar(select(func.count()).select_from(self.model)) or 0)
            stmt = (
                select(self.model)
                .order_by(self.model.created_at.desc())
                .limit(page_size)
                .offset(offset)
            )
            rows = list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            self._fail("list", exc)
        return rows, total

    def list_all(self, *order_by: Any) -> list[ModelT]:
        """Every row, newest first unless an explicit ordering is given."""

        clauses = order_by or (self.model.created_at.desc(),)
        try:
            return list(self.db.scalars(select(self.model).order_by(*clauses)).all())
        except SQLAlchemyError as exc:
            self._fail("list_all", exc)

    def count(self) -> int:
        try:
            return int(self.db.scalar(select(func.count()).select_from(self.model)) or 0)
        except SQLAlchemyError as exc:
            self._fail("count", exc)

    def get(self, record_id: str) -> ModelT | None:
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as exc:
            self._fail("get", exc)

    def create(self, fields: dict[str, Any]) -> ModelT:
        record = self.model(**self._writable(fields))
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("create", exc)
        return record

    def update(self, record_id: str, fields: dict[str, Any]) -> ModelT:
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"No {self.table_name} row with id {record_id}")
        for key, value in self._writable(fields).items():
            setattr(record, key, value)
        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("update", exc)
        return record

    def delete(self, record_id: str) -> None:
        try:
            result = self.db.execute(delete(self.model).where(self.model.id == record_id))
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("delete", exc)
        if not result.rowcount:
            raise RecordNotFoundError(f"No {self.table_name} row with id {record_id}")

    def insert_many(self, rows: Sequence[dict[str, Any]]) -> list[ModelT]:
        """Insert every row in one transaction; any failure rejects the whole batch."""

        records = [self.model(**self._writable(row)) for row in rows]
        try:
            self.db.add_all(records)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("insert_many", exc)
        for record in records:
            self.db.refresh(record)
        return records

    def _writable(self, fields: dict[str, Any]) -> dict[str, Any]:
        columns = self.model.__table__.columns
        unknown = sorted(key for key in fields if key not in columns)
        if unknown:
            raise GatewayError(f"Unknown column(s) for {self.table_name}: {', '.join(unknown)}")
        return {key: value for key, value in fields.items() if key not in {"id", "created_at", "updated_at"}}

    def _fail(self, operation: str, exc: SQLAlchemyError) -> NoReturn:
        self.db.rollback()
        logger.warning(
            "gateway.%s_failed table=%s error=%s",
            operation,
            self.table_name,
            exc.__class__.__name__,
        )
        raise GatewayError(_describe(exc)) from exc


def record_to_dict(record: Base) -> dict[str, Any]:
    """Flatten an ORM row into a column-key mapping."""

    return {column.key: getattr(record, column.key) for column in record.__table__.columns}


def _describe(exc: SQLAlchemyError) -> str:
    origin = getattr(exc, "orig", None)
    text = str(origin if origin is not None else exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__
