"""Atomic sequential key generation.

Uses the ``id_counters`` table inside the caller's transaction so keys
have no gaps or duplicates.

The caller owns the transaction. Pass a ``Connection`` obtained from
``engine.begin()`` so the counter increment commits or rolls back
together with the surrounding writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from fixturectl.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection


def next_sequential_key(conn: Connection, counter: str) -> int:
    """Claim the next key for *counter*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        counter: Name of a seeded counter row (e.g. ``"upload"``).

    Returns:
        The claimed key, starting at 1.

    Raises:
        ValueError: If *counter* has not been seeded.
    """
    row = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.name == counter)
    ).first()
    if row is None:
        msg = f"Unknown sequential counter: {counter!r}"
        raise ValueError(msg)

    current_value: int = row.next_value
    conn.execute(
        update(id_counters)
        .where(id_counters.c.name == counter)
        .values(next_value=current_value + 1)
    )
    return current_value
