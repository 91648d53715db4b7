from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import InvariantViolation
from .events import Compare, Complete, Overwrite, SetState, StepEvent, Swap
from .model import Bar, Element, VisualState


class WorkingSequence:
    """
    The bars one algorithm invocation sorts in place.

    Length is fixed for the lifetime of the sequence. The mutators
    (``mark``, ``swap``, ``overwrite``) are the only way to change it and
    each returns the event describing what it did, so an algorithm can
    ``yield seq.swap(i, j)`` and never mutate silently.
    """

    def __init__(self, elements: Iterable[Element]):
        self._bars: List[Bar] = [Bar(e) for e in elements]
        identities = {b.identity for b in self._bars}
        if len(identities) != len(self._bars):
            raise InvariantViolation("duplicate element identity in working sequence")

    @classmethod
    def from_values(cls, values: Iterable) -> "WorkingSequence":
        return cls(Element.create(v) for v in values)

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bars[self._check(index)]

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __repr__(self) -> str:
        return f"WorkingSequence({self.values()!r})"

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._bars):
            raise InvariantViolation(f"index {index} out of range for length {len(self._bars)}")
        return index

    # ---- reads ----

    def values(self) -> list:
        return [b.value for b in self._bars]

    def elements(self, start: int = 0, stop: Optional[int] = None) -> List[Element]:
        """Snapshot copy of the elements in ``[start, stop)``."""
        return [b.element for b in self._bars[start:stop]]

    def state(self, index: int) -> VisualState:
        return self._bars[self._check(index)].state

    def snapshot(self) -> List[Bar]:
        return [Bar(b.element, b.state) for b in self._bars]

    def all_sorted(self) -> bool:
        return all(b.state is VisualState.SORTED for b in self._bars)

    def compare(self, i: int, j: int) -> Compare:
        """Read both slots and describe the comparison. Changes nothing."""
        return Compare(i, j, (self[i].value, self[j].value))

    # ---- mutators ----

    def mark(self, index: int, state: VisualState, hold: float = 0.0) -> SetState:
        self._bars[self._check(index)].state = state
        return SetState(index, state, hold)

    def swap(self, i: int, j: int) -> Swap:
        self._check(i), self._check(j)
        bars = self._bars
        bars[i], bars[j] = bars[j], bars[i]
        return Swap(i, j)

    def overwrite(self, index: int, element: Element) -> Overwrite:
        # The destination keeps its marker; only the element is replaced.
        bar = self._bars[self._check(index)]
        self._bars[index] = Bar(element, bar.state)
        return Overwrite(index, element)

    def reset_states(self) -> None:
        for bar in self._bars:
            bar.state = VisualState.UNSORTED

    def apply(self, event: StepEvent) -> None:
        """Re-enact a recorded event on this sequence."""
        if isinstance(event, Swap):
            self.swap(event.i, event.j)
        elif isinstance(event, Overwrite):
            self.overwrite(event.index, event.element)
        elif isinstance(event, SetState):
            self.mark(event.index, event.state)
        elif isinstance(event, Complete) and not self.all_sorted():
            raise InvariantViolation("Complete emitted before every element was sorted")


def replay(initial: Sequence[Element], events: Iterable[StepEvent]) -> WorkingSequence:
    """Rebuild the final sequence from the initial elements and an event stream."""
    seq = WorkingSequence(initial)
    for event in events:
        seq.apply(event)
    return seq
