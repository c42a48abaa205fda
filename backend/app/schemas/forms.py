"""Shared form validation helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: str) -> str:
    clean = value.strip()
    if not _EMAIL_PATTERN.match(clean):
        raise ValueError("Invalid email address")
    return clean


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    clean = value.strip()
    return clean or None


def field_errors(errors: Iterable[dict[str, Any]]) -> dict[str, str]:
    """Collapse pydantic error entries to the first message per top-level field."""

    collected: dict[str, str] = {}
    for error in errors:
        location = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        key = str(location[0]) if location else "__root__"
        message = str(error.get("msg", "Invalid value"))
        message = message.removeprefix("Value error, ")
        collected.setdefault(key, message)
    return collected
