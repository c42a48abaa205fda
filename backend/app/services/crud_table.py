"""Paginated CRUD table controller driven by an entity schema.

One controller holds one page of records plus the create/edit dialog draft.
Every mutation re-fetches the current page; failures are recorded as error
notifications and leave the last good records in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from app.schema.columns import EntitySchema, coerce_value
from app.services.exports import (
    ExportedFile,
    ImportFormatError,
    build_print_document,
    build_workbook,
    parse_workbook,
)
from app.services.gateway import GatewayError, RecordNotFoundError, TableGateway, record_to_dict
from app.services.notifications import NotificationLog
from app.services.pagination import PageWindow, PaginationControl, build_pagination, clamp_page

logger = logging.getLogger(__name__)


class TableState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EDITING = "editing"


class DraftValidationError(ValueError):
    """The open draft failed validation; nothing was sent to the store."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__(next(iter(field_errors.values()), "Invalid form"))
        self.field_errors = field_errors


@dataclass
class FormDraft:
    """Pending values of the create/edit dialog."""

    values: dict[str, Any]
    record_id: str | None = None

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None


@dataclass
class CrudTable:
    schema: EntitySchema
    gateway: TableGateway
    current_page: int = 1
    records: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    state: TableState = TableState.IDLE
    draft: FormDraft | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    notifications: NotificationLog | None = None

    def __post_init__(self) -> None:
        if self.current_page < 1:
            self.current_page = 1
        if self.notifications is None:
            self.notifications = NotificationLog(source=self.schema.name)

    @classmethod
    def open(cls, db: Session, schema: EntitySchema, *, page: int = 1) -> "CrudTable":
        """Build a table for ``schema`` and load ``page``."""

        table = cls(schema=schema, gateway=TableGateway(db, schema.model), current_page=page)
        table.fetch()
        return table

    @property
    def window(self) -> PageWindow:
        return PageWindow(
            current_page=self.current_page,
            page_size=self.schema.page_size,
            total_count=self.total_count,
        )

    @property
    def pagination(self) -> PaginationControl:
        return build_pagination(self.window)

    def fetch(self) -> bool:
        """Reload the current page; on failure keep the previous rows and total."""

        prior = self.state
        self.state = TableState.LOADING
        try:
            rows, total = self.gateway.list_page(self.current_page, self.schema.page_size)
        except GatewayError as exc:
            self.notifications.error(exc.message)
            return False
        finally:
            self.state = prior if prior is not TableState.LOADING else TableState.IDLE
        self.records = [record_to_dict(row) for row in rows]
        self.total_count = total
        return True

    def go_to_page(self, page: int) -> bool:
        self.current_page = max(page, 1)
        return self.fetch()

    def next_page(self) -> bool:
        if self.pagination.next_disabled:
            return False
        return self.go_to_page(clamp_page(self.current_page + 1, self.window.total_pages))

    def previous_page(self) -> bool:
        if self.pagination.previous_disabled:
            return False
        return self.go_to_page(clamp_page(self.current_page - 1, self.window.total_pages))

    def open_create(self) -> FormDraft:
        self.draft = FormDraft(values=self.schema.empty_draft())
        self.field_errors = {}
        self.state = TableState.EDITING
        return self.draft

    def open_edit(self, record_id: str) -> FormDraft:
        record = next((row for row in self.records if row.get(self.schema.id_key) == record_id), None)
        if record is None:
            stored = self.gateway.get(record_id)
            if stored is None:
                raise LookupError(f"{self.schema.title} {record_id} not found")
            record = record_to_dict(stored)
        self.draft = FormDraft(values=self.schema.draft_from_record(record), record_id=record_id)
        self.field_errors = {}
        self.state = TableState.EDITING
        return self.draft

    def set_field(self, key: str, value: Any) -> None:
        if self.draft is None:
            raise RuntimeError("No dialog is open")
        if key not in self.draft.values:
            raise KeyError(f"{key} is not an editable column of {self.schema.name}")
        self.draft.values[key] = value

    def cancel(self) -> None:
        self.draft = None
        self.field_errors = {}
        self.state = TableState.IDLE

    def validate_draft(self) -> dict[str, Any]:
        """Return the draft coerced to column types, or raise ``DraftValidationError``."""

        if self.draft is None:
            raise RuntimeError("No dialog is open")
        cleaned: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for column in self.schema.editable_columns:
            try:
                value = coerce_value(column, self.draft.values.get(column.key))
            except ValueError as exc:
                errors[column.key] = str(exc)
                continue
            if value is None and column.required:
                errors[column.key] = f"{column.label} is required"
                continue
            cleaned[column.key] = value
        if errors:
            raise DraftValidationError(errors)
        return cleaned

    def submit(self) -> bool:
        """Validate, then create or update; on success close the dialog and re-fetch.

        Raises ``RecordNotFoundError`` when the edited row no longer exists.
        """

        try:
            fields = self.validate_draft()
        except DraftValidationError as exc:
            self.field_errors = exc.field_errors
            return False

        draft = self.draft
        try:
            if draft.is_edit:
                self.gateway.update(draft.record_id, fields)
            else:
                self.gateway.create(fields)
        except RecordNotFoundError as exc:
            self.notifications.error(exc.message)
            raise
        except GatewayError as exc:
            self.notifications.error(exc.message)
            return False

        verb = "updated" if draft.is_edit else "created"
        self.notifications.success(f"{self.schema.title} {verb} successfully")
        self.cancel()
        self.fetch()
        return True

    def delete(self, record_id: str) -> bool:
        """Delete then re-fetch the same page, even if it is now empty."""

        try:
            self.gateway.delete(record_id)
        except GatewayError as exc:
            self.notifications.error(exc.message)
            return False
        self.notifications.success(f"{self.schema.title} deleted successfully")
        self.fetch()
        return True

    def export_workbook(self) -> ExportedFile:
        exported = build_workbook(self.schema, self.records)
        self.notifications.success("Exported to Excel successfully")
        return exported

    def export_document(self) -> ExportedFile:
        exported = build_print_document(self.schema, self.records)
        self.notifications.success("PDF generated successfully")
        return exported

    def import_workbook(self, content: bytes) -> int | None:
        """Bulk-insert the first sheet's rows; all rows land or none do."""

        try:
            rows = parse_workbook(self.schema, content)
        except ImportFormatError as exc:
            self.notifications.error(str(exc))
            return None
        try:
            inserted = self.gateway.insert_many(rows)
        except GatewayError as exc:
            self.notifications.error(exc.message)
            return None
        logger.info("crud.import table=%s rows=%d", self.schema.name, len(inserted))
        self.notifications.success(f"Imported {len(inserted)} records")
        self.fetch()
        return len(inserted)
