"""
Execution Controller
====================
The single suspension point shared by every algorithm. The runner calls
``await_step`` after each paced event; that call implements speed
throttling, pause, single-step and cancellation uniformly, so no algorithm
ever sleeps or blocks on its own.

The engine runs on one thread and the driver calls pause/resume/step/cancel
from another. All state lives behind one ``threading.Condition``.
"""
from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class StepResult(Enum):
    PROCEED = "proceed"
    ABORT   = "abort"


class ExecutionController:
    def __init__(self):
        self._condition = threading.Condition()
        self._paused    = False
        self._cancelled = False
        self._steps     = 0     # single-step releases granted while paused
        self._parked    = 0     # executions currently waiting on a pause

    # ---- state ----

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def parked(self) -> bool:
        return self._parked > 0

    def rearm(self, paused: bool = False) -> None:
        """Clear cancel/step state ahead of a new run. Only call while idle."""
        with self._condition:
            self._cancelled = False
            self._steps     = 0
            self._paused    = paused

    # ---- driver side ----

    def pause(self) -> None:
        with self._condition:
            self._paused = True

    def resume(self) -> None:
        with self._condition:
            self._paused = False
            self._steps  = 0
            self._condition.notify_all()

    def step(self) -> bool:
        """Release exactly one parked suspension. Pause stays armed."""
        with self._condition:
            if not self._paused:
                return False
            self._steps += 1
            self._condition.notify_all()
            return True

    def cancel(self) -> None:
        with self._condition:
            if not self._cancelled:
                logger.debug("Cancellation requested")
            self._cancelled = True
            self._condition.notify_all()

    def wait_parked(self, timeout: Optional[float] = None) -> bool:
        """Block until an execution is parked on a pause (or timeout)."""
        with self._condition:
            return self._condition.wait_for(lambda: self._parked > 0, timeout)

    # ---- engine side ----

    def checkpoint(self) -> StepResult:
        """Non-blocking cancel check for events that carry no delay."""
        return StepResult.ABORT if self._cancelled else StepResult.PROCEED

    def await_step(self, delay_ms: float = 0.0) -> StepResult:
        deadline = time.monotonic() + max(delay_ms, 0.0) / 1000.0
        with self._condition:
            while True:
                if self._cancelled:
                    return StepResult.ABORT
                if self._paused:
                    if self._steps:
                        self._steps -= 1
                        return StepResult.PROCEED
                    self._parked += 1
                    self._condition.notify_all()
                    try:
                        self._condition.wait()
                    finally:
                        self._parked -= 1
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return StepResult.PROCEED
                # Woken early by pause/cancel; the loop re-evaluates.
                self._condition.wait(remaining)


class FreeRunningController(ExecutionController):
    """Zero-delay, non-pausable controller for running a sort without a driver."""

    def pause(self) -> None:
        logger.warning("pause() ignored by a free-running controller")

    def rearm(self, paused: bool = False) -> None:
        super().rearm(paused=False)

    def await_step(self, delay_ms: float = 0.0) -> StepResult:
        return self.checkpoint()
