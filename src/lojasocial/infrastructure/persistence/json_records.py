"""Helpers shared by the JSON repositories.

Each repository works on one list of raw records taken from the
document the unit of work loaded for the current transaction.
"""

from __future__ import annotations

from datetime import datetime, timezone


def upsert(records: list[dict], raw: dict, key: str = "id") -> None:
    """Replace the record with the same key, otherwise append."""
    for i, existing in enumerate(records):
        if existing[key] == raw[key]:
            records[i] = raw
            return
    records.append(raw)


def find(records: list[dict], value: str, key: str = "id") -> dict | None:
    for raw in records:
        if raw[key] == value:
            return raw
    return None


def dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def load_datetime(value: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
