import time

import numpy as np
import pytest

from sortanimation import Direction, FreeRunningController, WorkingSequence, run_sort

SEED = 42


def build_shape(shape: str, n: int = 40) -> list:
    rng = np.random.default_rng(SEED)
    if shape == "empty":
        return []
    if shape == "singleton":
        return [7]
    if shape == "sorted":
        return list(range(1, n + 1))
    if shape == "reversed":
        return list(range(n, 0, -1))
    if shape == "duplicates":
        return rng.integers(1, 5, size=n).tolist()
    if shape == "random":
        return rng.permutation(np.arange(1, n + 1)).tolist()
    if shape == "negatives":
        return rng.integers(-20, 20, size=n).tolist()
    raise ValueError(shape)


SHAPES = ["empty", "singleton", "sorted", "reversed", "duplicates", "random", "negatives"]
DIRECTIONS = [Direction.ASCENDING, Direction.DESCENDING]


def record(algorithm, values, direction=Direction.ASCENDING):
    """Run a sort unpaced and return (initial elements, final sequence, events)."""
    seq = WorkingSequence.from_values(values)
    initial = seq.elements()
    events = []
    run_sort(algorithm, seq, direction, FreeRunningController(), events.append)
    return initial, seq, events


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.002)
    return predicate()


@pytest.fixture
def rng():
    return np.random.default_rng(SEED)
