"""Entity schemas for data-driven CRUD tables."""

from app.schema.columns import ColumnDescriptor, EntitySchema, ValueType, coerce_value
from app.schema.registry import ENTITY_SCHEMAS, get_entity_schema

__all__ = [
    "ENTITY_SCHEMAS",
    "ColumnDescriptor",
    "EntitySchema",
    "ValueType",
    "coerce_value",
    "get_entity_schema",
]
