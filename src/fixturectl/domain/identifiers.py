"""Fixture identifier qualification.

A fixture identifier is the dotted path of its definition module:
``<namespace>.<name><suffix>``. Names that already contain the namespace
separator are treated as fully qualified and only get the suffix.

Examples:
    >>> qualify("user", namespace="tests.fixtures", suffix="_fixture")
    'tests.fixtures.user_fixture'
    >>> qualify("fixturectl.fixtures.init_db", namespace="tests.fixtures", suffix="_fixture")
    'fixturectl.fixtures.init_db_fixture'
"""

from __future__ import annotations

from pathlib import Path

NAMESPACE_SEPARATOR = "."


def is_namespaced(name: str) -> bool:
    """Whether *name* already carries a namespace."""
    return NAMESPACE_SEPARATOR in name


def qualify(name: str, *, namespace: str, suffix: str) -> str:
    """Return the fully-qualified identifier for *name*."""
    if is_namespaced(name):
        return f"{name}{suffix}"
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}{suffix}"


def bare_name(stem: str, suffix: str) -> str:
    """Strip *suffix* from a definition file stem (``user_fixture`` -> ``user``)."""
    if suffix and stem.endswith(suffix):
        return stem[: -len(suffix)]
    return stem


def namespace_path(root: Path, namespace: str) -> Path:
    """Map a dotted *namespace* onto a directory under *root*.

    ``tests.fixtures`` becomes ``<root>/tests/fixtures``.
    """
    path = root
    for part in namespace.split(NAMESPACE_SEPARATOR):
        if part:
            path = path / part
    return path
