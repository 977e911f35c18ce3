"""Operator name filtering.

Raw tokens from the command line are split into names to apply and
names to exclude. A token that carries the exclusion marker anywhere
(``-User``, ``User-``) is an exclusion; every marker character is
stripped from it. Everything else is applied as given.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

EXCLUDE_MARKER = "-"
WILDCARD = "*"


@dataclass(frozen=True)
class FilteredNames:
    """Tokens split into the ``apply`` and ``except_`` lists.

    Input order is preserved in both lists. No deduplication and no case
    normalisation happen here.
    """

    apply: list[str] = field(default_factory=list)
    except_: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"apply": list(self.apply), "except": list(self.except_)}


def filter_names(tokens: Iterable[str]) -> FilteredNames:
    """Split *tokens* into names to apply and names to exclude.

    Examples:
        >>> filter_names(["-A", "B"])
        FilteredNames(apply=['B'], except_=['A'])
    """
    apply: list[str] = []
    except_: list[str] = []
    for token in tokens:
        if EXCLUDE_MARKER in token:
            except_.append(token.replace(EXCLUDE_MARKER, ""))
        else:
            apply.append(token)
    return FilteredNames(apply=apply, except_=except_)


def is_wildcard(names: Iterable[str]) -> bool:
    """True when any of *names* asks for every discovered fixture."""
    return any(name == WILDCARD for name in names)


def subtract(names: Iterable[str], excluded: Iterable[str]) -> list[str]:
    """Return *names* minus *excluded*, keeping order and dropping repeats."""
    skip = set(excluded)
    result: list[str] = []
    for name in names:
        if name in skip or name in result:
            continue
        result.append(name)
    return result
