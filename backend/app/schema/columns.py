"""Column descriptors and entity schemas for data-driven tables."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from app.models.base import Base


class ValueType(str, Enum):
    """Declared scalar type of a column."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class ColumnDescriptor:
    """One displayed column of an entity table."""

    key: str
    label: str
    editable: bool = True
    value_type: ValueType = ValueType.TEXT
    required: bool = True


@dataclass(frozen=True)
class EntitySchema:
    """Static declaration of a table: its columns, labels and paging."""

    name: str
    title: str
    model: type[Base]
    columns: tuple[ColumnDescriptor, ...]
    page_size: int = 10
    id_key: str = "id"
    _by_label: dict[str, ColumnDescriptor] = field(init=False, repr=False, compare=False)
    _by_key: dict[str, ColumnDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        object.__setattr__(self, "_by_label", {column.label: column for column in self.columns})
        object.__setattr__(self, "_by_key", {column.key: column for column in self.columns})

    @property
    def editable_columns(self) -> tuple[ColumnDescriptor, ...]:
        return tuple(column for column in self.columns if column.editable and column.key != self.id_key)

    @property
    def labels(self) -> list[str]:
        return [column.label for column in self.columns]

    def match_header(self, header: str) -> ColumnDescriptor | None:
        """Resolve a spreadsheet header to a column, by label first and key second."""

        clean = header.strip()
        return self._by_label.get(clean) or self._by_key.get(clean)

    def empty_draft(self) -> dict[str, Any]:
        return {column.key: "" for column in self.editable_columns}

    def draft_from_record(self, record: dict[str, Any]) -> dict[str, Any]:
        return {column.key: record.get(column.key) for column in self.editable_columns}


def coerce_value(column: ColumnDescriptor, raw: Any) -> Any:
    """Convert a draft value to the column's declared type.

    Blank values become None. Raises ValueError when the value cannot be
    represented in the declared type.
    """

    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    if column.value_type is ValueType.NUMBER:
        if isinstance(raw, bool):
            raise ValueError(f"{column.label} must be a number")
        if isinstance(raw, int):
            return raw
        try:
            number = float(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{column.label} must be a number") from exc
        if not math.isfinite(number):
            raise ValueError(f"{column.label} must be a finite number")
        return int(number) if number.is_integer() else number
    if column.value_type is ValueType.DATE:
        if isinstance(raw, datetime):
            return raw
        try:
            return datetime.fromisoformat(str(raw))
        except ValueError as exc:
            raise ValueError(f"{column.label} must be a date") from exc
    return str(raw)
