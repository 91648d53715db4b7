"""
Step Event Model
================
Every algorithm is a generator of step events. An event is an immutable
record of one atomic engine action, already applied to the working
sequence by the time it is yielded.

The runner stamps each event with a logical ``tick`` (its 0-based position
in the run) before handing it to the sink, so the stream is a total order
and a complete audit trail: replaying it against the initial elements
reproduces the final sequence (see ``sequence.replay``).

``pace`` is how many speed-delays the runner holds after the event.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from .model import Element, VisualState
from .settings import COMPARE_PACE, SWAP_PACE


@dataclass(frozen=True)
class StepEvent:
    tick: int = field(default=-1, kw_only=True)

    PACE = 0.0

    @property
    def pace(self) -> float:
        return self.PACE

    def stamped(self, tick: int) -> "StepEvent":
        return replace(self, tick=tick)


@dataclass(frozen=True)
class Compare(StepEvent):
    """
    Two values were compared. ``values`` holds them as read, in ``(i, j)``
    order. A merge compares its left operand out of a run snapshot whose
    slot may already be overwritten, so ``i`` is then the destination slot
    and only ``values`` says what was compared.
    """
    i: int
    j: int
    values: Tuple[Any, ...] = ()

    PACE = COMPARE_PACE


@dataclass(frozen=True)
class SetState(StepEvent):
    index: int
    state: VisualState
    hold: float = 0.0

    @property
    def pace(self) -> float:
        return self.hold


@dataclass(frozen=True)
class Swap(StepEvent):
    i: int
    j: int

    PACE = SWAP_PACE


@dataclass(frozen=True)
class Overwrite(StepEvent):
    index: int
    element: Element

    PACE = SWAP_PACE


@dataclass(frozen=True)
class Complete(StepEvent):
    pass
