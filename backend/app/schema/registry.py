"""Registry of entities served by the generic CRUD table."""

from __future__ import annotations

from app.config import get_settings
from app.models.reference import Area, Award
from app.schema.columns import ColumnDescriptor, EntitySchema, ValueType


def _reference_columns() -> tuple[ColumnDescriptor, ...]:
    return (
        ColumnDescriptor(key="id", label="ID", editable=False),
        ColumnDescriptor(key="name", label="Name"),
        ColumnDescriptor(key="created_at", label="Created At", editable=False, value_type=ValueType.DATE),
        ColumnDescriptor(key="updated_at", label="Updated At", editable=False, value_type=ValueType.DATE),
    )


_PAGE_SIZE = get_settings().default_page_size

ENTITY_SCHEMAS: dict[str, EntitySchema] = {
    "area": EntitySchema(
        name="area", title="Area", model=Area, columns=_reference_columns(), page_size=_PAGE_SIZE
    ),
    "award": EntitySchema(
        name="award", title="Award", model=Award, columns=_reference_columns(), page_size=_PAGE_SIZE
    ),
}


def get_entity_schema(name: str) -> EntitySchema | None:
    """Return the registered schema for an entity name."""

    return ENTITY_SCHEMAS.get(name.strip().lower())
