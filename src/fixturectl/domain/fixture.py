"""The fixture capability and the context fixtures are built with."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@runtime_checkable
class Fixture(Protocol):
    """A unit of setup/teardown logic.

    ``unload()`` must be safe on fresh state: it is always called before
    ``load()`` so that loading twice ends in the same state as loading once.
    """

    def load(self) -> None: ...

    def unload(self) -> None: ...


@dataclass(frozen=True)
class FixtureContext:
    """Everything a fixture factory may need to build a fixture.

    Attributes:
        engine: Backend the fixtures mutate.
        namespace: Dotted namespace the command runs against.
        namespace_dir: Directory the namespace maps to (data files live here).
        options: Free-form values from configuration.
    """

    engine: Engine
    namespace: str
    namespace_dir: Path
    options: dict[str, Any] = field(default_factory=dict)


FixtureFactory = Callable[[FixtureContext], Fixture]
