"""Spreadsheet and print-document export, spreadsheet import."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime
from io import BytesIO
from typing import Any
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.schema.columns import ColumnDescriptor, EntitySchema, ValueType

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"
PLACEHOLDER = "-"
DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_SHEET_TITLE_LIMIT = 31


class ImportFormatError(ValueError):
    """Uploaded file is not a readable workbook."""


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    media_type: str
    content: bytes


def export_filename(title: str, extension: str, *, now_ms: int | None = None) -> str:
    """``{title}_{timestamp}.{ext}`` with a millisecond epoch timestamp."""

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{title}_{stamp}.{extension}"


def build_workbook(schema: EntitySchema, records: list[dict[str, Any]]) -> ExportedFile:
    """One sheet: a header row of column labels and one row per record."""

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = schema.title[:_SHEET_TITLE_LIMIT]
    sheet.append(schema.labels)
    for record in records:
        sheet.append([_sheet_value(record.get(column.key)) for column in schema.columns])

    buffer = BytesIO()
    workbook.save(buffer)
    return ExportedFile(
        filename=export_filename(schema.title, "xlsx"),
        media_type=XLSX_MEDIA_TYPE,
        content=buffer.getvalue(),
    )


def build_print_document(schema: EntitySchema, records: list[dict[str, Any]]) -> ExportedFile:
    """Tabular PDF with the column labels as header row."""

    buffer = BytesIO()
    document = SimpleDocTemplate(buffer, pagesize=A4, title=schema.title)
    styles = getSampleStyleSheet()

    rows = [schema.labels]
    rows.extend(
        [format_display_value(column, record.get(column.key)) for column in schema.columns]
        for record in records
    )
    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2980b9")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    document.build([Paragraph(schema.title, styles["Heading1"]), Spacer(1, 6), table])
    return ExportedFile(
        filename=export_filename(schema.title, "pdf"),
        media_type=PDF_MEDIA_TYPE,
        content=buffer.getvalue(),
    )


def format_display_value(column: ColumnDescriptor, value: Any) -> str:
    """Render one cell for print; dates with a four-digit year, blanks a dash."""

    if value is None or value == "":
        return PLACEHOLDER
    if column.value_type is ValueType.DATE:
        parsed = _as_datetime(value)
        if parsed is not None:
            return parsed.strftime(DISPLAY_DATETIME_FORMAT)
    return str(value)


def parse_workbook(schema: EntitySchema, content: bytes) -> list[dict[str, Any]]:
    """Read the first sheet into rows keyed by editable column key.

    Headers are matched by column label, then by column key. The id column,
    read-only columns and unknown headers are dropped. Fully blank rows are
    skipped; any other row is kept even when its matched cells are empty.
    Text cells are stripped and blank text becomes None.
    """

    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise ImportFormatError("File is not a readable .xlsx workbook") from exc

    try:
        if not workbook.worksheets:
            return []
        sheet_rows = workbook.worksheets[0].iter_rows(values_only=True)
        header = next(sheet_rows, None)
        if header is None:
            return []

        editable_keys = {column.key for column in schema.editable_columns}
        mapping: list[tuple[int, ColumnDescriptor]] = []
        for index, cell in enumerate(header):
            if cell is None:
                continue
            column = schema.match_header(str(cell))
            if column is not None and column.key in editable_keys:
                mapping.append((index, column))

        parsed: list[dict[str, Any]] = []
        for values in sheet_rows:
            if values is None or all(value is None for value in values):
                continue
            row: dict[str, Any] = {}
            for index, column in mapping:
                value = values[index] if index < len(values) else None
                row[column.key] = _field_value(column, value)
            parsed.append(row)
        return parsed
    finally:
        workbook.close()


def _sheet_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return value


def _field_value(column: ColumnDescriptor, value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip() or None
    if value is None:
        return None
    if column.value_type is ValueType.TEXT and not isinstance(value, str):
        return str(value)
    return value


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None
