"""
Sorting Session
===============
The driver-facing facade: owns one WorkingSequence, one controller and one
statistics accumulator, and runs each sort on its own daemon thread.

    session = SortingSession(element_count=50, algorithm="quick")
    session.subscribe(lambda event, stats: ...)
    session.start()
    session.pause(); session.step(); session.resume()
    session.wait()

Sinks are called synchronously on the runner thread, in event order, with
a statistics snapshot that already includes the event. A sink must not
mutate the sequence and must not call ``reset()``.
"""
from __future__ import annotations

import logging
import numbers
import threading
from typing import Callable, List, Optional

import numpy as np

from .algorithms import Algorithm
from .controller import ExecutionController
from .errors import ConfigurationError
from .events import StepEvent
from .model import Bar, Direction, Element
from .runner import RunOutcome, run_sort
from .sequence import WorkingSequence
from .settings import (
    DEFAULT_ARRAY_SIZE,
    DEFAULT_SPEED_MS,
    MAX_ARRAY_SIZE,
    MAX_SPEED_MS,
    MIN_ARRAY_SIZE,
    MIN_SPEED_MS,
)
from .stats import Statistics, StatisticsAccumulator

logger = logging.getLogger(__name__)

SessionSink = Callable[[StepEvent, Statistics], None]
FinishCallback = Callable[[RunOutcome], None]


def _check_count(element_count) -> int:
    if isinstance(element_count, bool) or not isinstance(element_count, numbers.Integral):
        raise ConfigurationError(f"element count must be an integer, got {element_count!r}")
    if not MIN_ARRAY_SIZE <= element_count <= MAX_ARRAY_SIZE:
        raise ConfigurationError(
            f"element count {element_count} outside [{MIN_ARRAY_SIZE}, {MAX_ARRAY_SIZE}]"
        )
    return int(element_count)


def _parse_direction(direction) -> Direction:
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        for member in Direction:
            if direction.lower() in (member.name.lower(), member.value.lower()):
                return member
    raise ConfigurationError(f"Unknown direction: {direction!r}")


class SortingSession:
    def __init__(self, element_count: int = DEFAULT_ARRAY_SIZE,
                 algorithm=Algorithm.BUBBLE,
                 direction=Direction.ASCENDING,
                 speed: float = DEFAULT_SPEED_MS,
                 seed: Optional[int] = None,
                 final_sweep: bool = True):
        self._element_count = _check_count(element_count)
        self._algorithm     = Algorithm.lookup(algorithm)
        self._direction     = _parse_direction(direction)
        self.speed          = speed
        self._rng           = np.random.default_rng(seed)
        self._final_sweep   = final_sweep

        self._controller = ExecutionController()
        self._statistics = StatisticsAccumulator()
        self._sinks: List[SessionSink] = []
        self._finish_callbacks: List[FinishCallback] = []

        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._outcome: Optional[RunOutcome] = None
        self._error: Optional[BaseException] = None
        self._seq: WorkingSequence = WorkingSequence([])
        self._initial: List[Element] = []
        self.reset()

    # ---- configuration ----

    @property
    def element_count(self) -> int:
        return self._element_count

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        self._speed = float(min(MAX_SPEED_MS, max(MIN_SPEED_MS, value)))

    def configure(self, element_count: Optional[int] = None, algorithm=None, direction=None) -> None:
        """Change the setup. Only valid while idle; a new count reshuffles."""
        if self.running:
            raise ConfigurationError("cannot configure while a sort is running")
        # Validate everything before touching anything.
        count     = _check_count(element_count) if element_count is not None else self._element_count
        algorithm = Algorithm.lookup(algorithm) if algorithm is not None else self._algorithm
        direction = _parse_direction(direction) if direction is not None else self._direction

        resize = count != self._element_count
        self._element_count = count
        self._algorithm     = algorithm
        self._direction     = direction
        if resize:
            self.reset()

    # ---- subscriptions ----

    def subscribe(self, sink: SessionSink) -> None:
        self._sinks.append(sink)

    def unsubscribe(self, sink: SessionSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def subscribe_finished(self, callback: FinishCallback) -> None:
        self._finish_callbacks.append(callback)

    def _dispatch(self, event: StepEvent) -> None:
        snapshot = self._statistics.snapshot()
        for sink in list(self._sinks):
            sink(event, snapshot)

    # ---- lifecycle ----

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def paused(self) -> bool:
        return self._controller.paused

    @property
    def outcome(self) -> Optional[RunOutcome]:
        return self._outcome

    @property
    def controller(self) -> ExecutionController:
        return self._controller

    def reset(self) -> None:
        """Cancel any run, wait for it to stop, then reshuffle 1..n."""
        if self._thread is threading.current_thread():
            raise ConfigurationError("reset() cannot be called from the runner thread")
        with self._lock:
            self._controller.cancel()
            if self._thread is not None:
                self._thread.join()
                self._thread = None

            values = self._rng.permutation(np.arange(1, self._element_count + 1)).tolist()
            self._seq     = WorkingSequence.from_values(values)
            self._initial = self._seq.elements()
            self._controller.rearm()
            self._statistics.reset()
            self._outcome = None
            self._error   = None
        logger.info("Reset: %d elements, %s, %s",
                    self._element_count, self._algorithm.value, self._direction.value)

    def start(self, paused: bool = False) -> None:
        with self._lock:
            if self.running:
                raise ConfigurationError("a sort is already running")
            if self._outcome is RunOutcome.ABORTED:
                raise ConfigurationError("the previous run was aborted; reset() before starting again")
            if self._error is not None:
                raise ConfigurationError("the previous run failed; reset() before starting again")

            self._seq.reset_states()
            self._initial = self._seq.elements()
            self._controller.rearm(paused=paused)
            self._statistics.reset()
            self._outcome = None
            self._error   = None
            self._thread = threading.Thread(target=self._run, name="sortanimation-runner", daemon=True)
            self._thread.start()

    def _run(self) -> None:
        try:
            outcome = run_sort(
                self._algorithm, self._seq, self._direction, self._controller, self._dispatch,
                speed=lambda: self._speed,
                statistics=self._statistics,
                final_sweep=self._final_sweep,
            )
        except Exception as exc:
            logger.exception("Sort run failed")
            self._error = exc
            return
        self._outcome = outcome
        for callback in list(self._finish_callbacks):
            callback(outcome)

    def wait(self, timeout: Optional[float] = None) -> Optional[RunOutcome]:
        """Join the runner. Re-raises anything the run raised."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        if self._error is not None:
            raise self._error
        return self._outcome

    # ---- controller pass-throughs ----

    def pause(self) -> None:
        self._controller.pause()

    def resume(self) -> None:
        self._controller.resume()

    def cancel(self) -> None:
        self._controller.cancel()

    def step(self) -> bool:
        """Advance one step while paused; from idle, start paused."""
        if not self.running:
            self.start(paused=True)
            return True
        if not self._controller.step():
            logger.warning("step() ignored: the session is not paused")
            return False
        return True

    # ---- views ----

    @property
    def statistics(self) -> Statistics:
        return self._statistics.snapshot()

    @property
    def bars(self) -> List[Bar]:
        return self._seq.snapshot()

    @property
    def values(self) -> list:
        return self._seq.values()

    @property
    def initial_elements(self) -> List[Element]:
        """The elements as they stood when the current run started."""
        return list(self._initial)
