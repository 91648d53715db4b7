from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from .events import Compare, Complete, Overwrite, StepEvent, Swap


@dataclass(frozen=True)
class Statistics:
    comparisons: int = 0
    swaps: int = 0
    element_accesses: int = 0
    elapsed: float = 0.0        # seconds


class StatisticsAccumulator:
    """
    Derives run statistics purely from the event stream.

    Compare   -> +1 comparison, +2 accesses (two reads)
    Swap      -> +1 swap,       +4 accesses (two reads, two writes)
    Overwrite -> +2 accesses (read of the source element, write of the slot)
    Complete  -> stops the clock

    Instances are callable, so one can be passed anywhere a sink is expected.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.comparisons      = 0
        self.swaps            = 0
        self.element_accesses = 0
        self._started: Optional[float] = None
        self._stopped: Optional[float] = None

    def start(self) -> None:
        self.reset()
        self._started = time.monotonic()

    def stop(self) -> None:
        if self._started is not None and self._stopped is None:
            self._stopped = time.monotonic()

    @property
    def elapsed(self) -> float:
        if self._started is None:
            return 0.0
        end = self._stopped if self._stopped is not None else time.monotonic()
        return end - self._started

    def observe(self, event: StepEvent) -> None:
        if isinstance(event, Compare):
            self.comparisons += 1
            self.element_accesses += 2
        elif isinstance(event, Swap):
            self.swaps += 1
            self.element_accesses += 4
        elif isinstance(event, Overwrite):
            self.element_accesses += 2
        elif isinstance(event, Complete):
            self.stop()

    __call__ = observe

    def snapshot(self) -> Statistics:
        return Statistics(self.comparisons, self.swaps, self.element_accesses, self.elapsed)
