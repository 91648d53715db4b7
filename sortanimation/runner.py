"""
Runner
======
Drives one algorithm generator to completion or abort:

    for each event the algorithm yields:
        stamp its tick -> statistics -> sink -> suspend on the controller

Paced events (comparisons, swaps, overwrites, held markers) suspend through
``await_step(speed * pace)``; everything else passes a non-blocking cancel
checkpoint. Either way a cancel is observed within one event, and once it
is, the generator is closed and nothing further is emitted. Every change
the generator did make has been emitted, so replaying the stream matches
the sequence even after an abort.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

from .algorithms import Algorithm, get_generator
from .controller import ExecutionController, FreeRunningController, StepResult
from .errors import InvariantViolation
from .events import Complete, StepEvent
from .model import Direction, VisualState
from .sequence import WorkingSequence
from .settings import SWEEP_MAX_DELAY_MS, SWEEP_MIN_DELAY_MS, SWEEP_TOTAL_MS
from .stats import StatisticsAccumulator

logger = logging.getLogger(__name__)

Sink = Callable[[StepEvent], None]
Speed = Union[float, Callable[[], float]]


class RunOutcome(Enum):
    SORTED  = "sorted"
    ABORTED = "aborted"


def _drive(steps: Iterator[StepEvent], controller: ExecutionController,
           emit: Sink, step_ms: Callable[[], float], tick: int) -> Tuple[StepResult, int]:
    try:
        # Cancel is checked before the generator advances. Once it has
        # yielded, its change is already applied and must reach the sink.
        while not controller.cancelled:
            event = next(steps, None)
            if event is None:
                return StepResult.PROCEED, tick
            event = event.stamped(tick)
            tick += 1
            emit(event)
            if event.pace > 0:
                result = controller.await_step(step_ms() * event.pace)
            else:
                result = controller.checkpoint()
            if result is StepResult.ABORT:
                return result, tick
    finally:
        # A closed generator can never mutate the sequence again.
        steps.close()
    return StepResult.ABORT, tick

# ============================================================
# ======================= FINAL SWEEP ========================
# ============================================================

def sweep_delay(n: int) -> int:
    """Per-bar delay (ms) keeping the whole sweep near SWEEP_TOTAL_MS."""
    if n <= 0:
        return SWEEP_MAX_DELAY_MS
    return max(SWEEP_MIN_DELAY_MS, min(SWEEP_MAX_DELAY_MS, SWEEP_TOTAL_MS // n))


def sweep_steps(seq: WorkingSequence) -> Iterator[StepEvent]:
    """Left-to-right confirmation scan over a sorted sequence. Values are untouched."""
    for index in range(len(seq)):
        yield seq.mark(index, VisualState.COMPARING, hold=1.0)
        yield seq.mark(index, VisualState.SORTED)

# ============================================================
# ========================= RUN ==============================
# ============================================================

def run_sort(algorithm, seq: WorkingSequence, direction: Direction,
             controller: ExecutionController, sink: Optional[Sink] = None, *,
             speed: Speed = 0.0,
             statistics: Optional[StatisticsAccumulator] = None,
             final_sweep: bool = False) -> RunOutcome:
    """
    Sort ``seq`` in place on the calling thread.

    ``speed`` is the delay per step in milliseconds, or a callable returning
    it; a callable is read before every suspension, so changes apply to the
    next step. Returns RunOutcome.ABORTED if the controller was cancelled
    before the sort completed. Events from the final sweep follow
    ``Complete`` and do not affect the outcome.
    """
    algorithm = Algorithm.lookup(algorithm)
    step_ms = speed if callable(speed) else (lambda: speed)
    stats = statistics if statistics is not None else StatisticsAccumulator()

    def emit(event: StepEvent) -> None:
        stats.observe(event)
        if sink is not None:
            sink(event)

    logger.info("%s started: %d elements, %s", algorithm.value, len(seq), direction.value)
    stats.start()
    try:
        result, tick = _drive(get_generator(algorithm, seq, direction), controller, emit, step_ms, 0)
    finally:
        stats.stop()

    if result is StepResult.ABORT:
        logger.info("%s aborted after %d events", algorithm.value, tick)
        return RunOutcome.ABORTED

    if not seq.all_sorted():
        raise InvariantViolation(f"{algorithm.value} finished with unsorted markers")
    if not direction.in_order(seq.values()):
        raise InvariantViolation(f"{algorithm.value} finished out of order")
    emit(Complete(tick=tick))
    snapshot = stats.snapshot()
    logger.info("%s complete: %d comparisons, %d swaps, %d accesses in %.3fs",
                algorithm.value, snapshot.comparisons, snapshot.swaps,
                snapshot.element_accesses, snapshot.elapsed)

    if final_sweep:
        delay = sweep_delay(len(seq))
        result, _ = _drive(sweep_steps(seq), controller, emit, lambda: delay, tick + 1)
        if result is StepResult.ABORT:
            logger.debug("final sweep cancelled")
    return RunOutcome.SORTED


def sort_values(values: Iterable, algorithm, direction: Direction = Direction.ASCENDING) -> list:
    """Sort plain values with the instrumented engine, minus pacing and sink."""
    seq = WorkingSequence.from_values(values)
    run_sort(algorithm, seq, direction, FreeRunningController())
    return seq.values()
