"""Helpers shared by the PocketBase repositories."""

from __future__ import annotations

from typing import Any

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from ..errors import RecordStoreError


def escape_filter_value(value: Any) -> str:
    """Escape a value for use inside a quoted PocketBase filter string.

    Single quotes are doubled to prevent filter injection (O'Brien -> O''Brien).
    """
    return str(value).replace("'", "''")


def record_to_dict(record: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    """Map a PocketBase record to a plain dict with ``id`` and the given fields."""
    data = {"id": record.id}
    for name in fields:
        data[name] = getattr(record, name, None)
    return data


def is_not_found(error: ClientResponseError) -> bool:
    return getattr(error, "status", None) == 404


def store_error(action: str, error: ClientResponseError) -> RecordStoreError:
    """Wrap an SDK error so callers only handle bondgraph errors."""
    return RecordStoreError(f"Failed to {action}: {error}")
