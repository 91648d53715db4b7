from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any

_identities = itertools.count(1)


def next_identity() -> int:
    return next(_identities)


@dataclass(frozen=True)
class Element:
    """A sortable value with an identity that outlives any move or copy."""
    identity: int
    value: Any

    @classmethod
    def create(cls, value) -> "Element":
        return cls(next_identity(), value)


class VisualState(Enum):
    UNSORTED  = "unsorted"
    COMPARING = "comparing"
    PIVOT     = "pivot"
    POINTER   = "pointer"
    SORTED    = "sorted"


# Any of these may sit on an index while it takes part in a swap/overwrite.
MARKERS = frozenset({VisualState.COMPARING, VisualState.PIVOT, VisualState.POINTER})


class Direction(Enum):
    ASCENDING  = "Ascending"
    DESCENDING = "Descending"

    def precedes(self, a, b) -> bool:
        """True if ``a`` must come strictly before ``b`` in this direction."""
        if self is Direction.ASCENDING:
            return a < b
        return a > b

    def in_order(self, values) -> bool:
        return all(not self.precedes(b, a) for a, b in zip(values, values[1:]))


@dataclass
class Bar:
    element: Element
    state: VisualState = VisualState.UNSORTED

    @property
    def identity(self) -> int:
        return self.element.identity

    @property
    def value(self):
        return self.element.value
