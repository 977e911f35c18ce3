"""Orchestration phases for the load and unload flows.

Load:   idle -> resolved -> confirmed -> unloading -> loading -> done
Unload: idle -> resolved -> confirmed -> unloading -> done

Any running phase may end in ``failed``. There is no way back from
``done`` or ``failed``; a new command starts a new orchestration.
"""

from __future__ import annotations

from enum import StrEnum


class FixtureAction(StrEnum):
    """Operator command."""

    LOAD = "load"
    UNLOAD = "unload"


class Phase(StrEnum):
    """Where an orchestration currently is."""

    IDLE = "idle"
    RESOLVED = "resolved"
    CONFIRMED = "confirmed"
    UNLOADING = "unloading"
    LOADING = "loading"
    DONE = "done"
    FAILED = "failed"


# --- Transition maps ---

LOAD_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["resolved"],
    "resolved": ["confirmed"],
    "confirmed": ["unloading"],
    "unloading": ["loading", "failed"],
    "loading": ["done", "failed"],
    "done": [],
    "failed": [],
}

UNLOAD_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["resolved"],
    "resolved": ["confirmed"],
    "confirmed": ["unloading"],
    "unloading": ["done", "failed"],
    "done": [],
    "failed": [],
}

TRANSITIONS: dict[FixtureAction, dict[str, list[str]]] = {
    FixtureAction.LOAD: LOAD_TRANSITIONS,
    FixtureAction.UNLOAD: UNLOAD_TRANSITIONS,
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if moving from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
