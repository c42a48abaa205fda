"""Schemas for generic CRUD table pages."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ColumnRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    editable: bool
    value_type: str
    required: bool


class TableSchemaRead(BaseModel):
    name: str
    title: str
    page_size: int
    columns: list[ColumnRead]


class PageLinkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page: int
    active: bool


class PaginationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    links: list[PageLinkRead]
    previous_disabled: bool
    next_disabled: bool
    visible: bool


class TablePageRead(BaseModel):
    """One loaded page of an entity table."""

    title: str
    records: list[dict[str, Any]]
    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    pagination: PaginationRead


class RecordWrite(BaseModel):
    """Dialog submission: values keyed by editable column key."""

    values: dict[str, Any]


class ImportResult(BaseModel):
    inserted: int
