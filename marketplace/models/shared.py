"""Shared model utilities used across all models."""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import inspect


def generate_id() -> str:
    """Generate a new string UUID primary key."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def as_row(instance: Any) -> dict[str, Any]:
    """Return a model instance as a mapping keyed by database column name.

    Several tables carry spreadsheet-import headers such as ``"Store Name"``
    next to snake_case columns, so the attribute name and the column name
    differ. Normalizers work on column names.
    """
    mapper = inspect(instance).mapper
    return {
        prop.columns[0].name: getattr(instance, prop.key)
        for prop in mapper.column_attrs
    }
