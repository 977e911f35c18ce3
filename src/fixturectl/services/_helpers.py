"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for upload records)."""
    return datetime.now(UTC).isoformat()


def parse_name_list(raw: str | None) -> list[str] | None:
    """Split a comma-separated option value.

    Returns None for None (option not given) and ``[]`` for an empty string.

    Examples:
        >>> parse_name_list("a, b,,c")
        ['a', 'b', 'c']
        >>> parse_name_list("")
        []
    """
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]
