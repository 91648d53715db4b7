"""
Sorting Engine
==============
Each algorithm is a generator ``sort(seq, direction)`` that sorts the
WorkingSequence in place and yields one StepEvent per atomic action
(see events.py). The runner decides what happens between yields: pacing,
pausing, cancelling. An algorithm never sleeps, never touches a driver and
never counts its own statistics.

Rules every algorithm follows:
  - All ordering decisions go through ``direction.precedes``.
  - An index taking part in a swap or overwrite is marked (comparing,
    pivot or pointer) first, and the algorithm clears its own markers.
  - Every bar ends in the sorted state; ``_finish`` sweeps up the rest.
  - n = 0 or 1 yields no Compare/Swap.
"""
from __future__ import annotations

import logging
import numbers
from enum import Enum
from typing import Callable, Dict, Iterator

from .errors import ConfigurationError
from .events import Compare, StepEvent
from .model import MARKERS, Direction, VisualState
from .sequence import WorkingSequence
from .settings import COMB_SHRINK, CYCLE_TARGET_PACE, MIN_RUN, RADIX_BASE, SWAP_PACE, TALLY_PACE

logger = logging.getLogger(__name__)

UNSORTED  = VisualState.UNSORTED
COMPARING = VisualState.COMPARING
PIVOT     = VisualState.PIVOT
POINTER   = VisualState.POINTER
SORTED    = VisualState.SORTED

Steps = Iterator[StepEvent]

# ============================================================
# ========================= HELPERS ==========================
# ============================================================

def _mark(seq: WorkingSequence, state: VisualState, *indices: int, hold: float = 0.0):
    """Set ``state`` on each index, yielding only actual changes."""
    for index in indices:
        if seq.state(index) is not state:
            yield seq.mark(index, state, hold)


def _compare(seq: WorkingSequence, direction: Direction, i: int, j: int):
    """Mark ``i`` and ``j``, then report whether ``seq[j]`` belongs before ``seq[i]``."""
    yield from _mark(seq, COMPARING, i, j)
    yield seq.compare(i, j)
    return direction.precedes(seq[j].value, seq[i].value)


def _swap(seq: WorkingSequence, i: int, j: int, marker: VisualState = COMPARING):
    for index in (i, j):
        if seq.state(index) not in MARKERS:
            yield seq.mark(index, marker)
    yield seq.swap(i, j)


def _exchange(seq: WorkingSequence, direction: Direction, i: int, j: int):
    """Compare ``i < j``, swap if out of order, clear both. Returns whether it swapped."""
    out_of_order = yield from _compare(seq, direction, i, j)
    if out_of_order:
        yield from _swap(seq, i, j)
    yield from _mark(seq, UNSORTED, i, j)
    return out_of_order


def _overwrite(seq: WorkingSequence, index: int, element):
    yield from _mark(seq, COMPARING, index)
    yield seq.overwrite(index, element)
    yield from _mark(seq, UNSORTED, index)


def _finish(seq: WorkingSequence):
    for index in range(len(seq)):
        yield from _mark(seq, SORTED, index)


def _integer_values(seq: WorkingSequence, name: str) -> list:
    values = seq.values()
    if not all(isinstance(v, numbers.Integral) for v in values):
        raise ConfigurationError(f"{name} requires integer values")
    return values

# ============================================================
# ====================== EXCHANGE SORTS ======================
# ============================================================

def bubble_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n = len(seq)
    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            if (yield from _exchange(seq, direction, j, j + 1)):
                swapped = True
        yield from _mark(seq, SORTED, n - i - 1)
        if not swapped:
            break
    yield from _finish(seq)


def cocktail_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    start, end = 0, len(seq) - 1
    while start < end:
        swapped = False
        for i in range(start, end):
            if (yield from _exchange(seq, direction, i, i + 1)):
                swapped = True
        yield from _mark(seq, SORTED, end)
        end -= 1
        if not swapped:
            break

        swapped = False
        for i in range(end - 1, start - 1, -1):
            if (yield from _exchange(seq, direction, i, i + 1)):
                swapped = True
        yield from _mark(seq, SORTED, start)
        start += 1
        if not swapped:
            break
    yield from _finish(seq)


def gnome_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    index = 0
    while index < len(seq):
        if index > 0 and (yield from _exchange(seq, direction, index - 1, index)):
            index -= 1
        else:
            index += 1
    yield from _finish(seq)


def comb_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n, gap, done = len(seq), len(seq), False
    while not done:
        gap = int(gap / COMB_SHRINK)
        if gap <= 1:
            gap, done = 1, True
        for i in range(n - gap):
            if (yield from _exchange(seq, direction, i, i + gap)):
                done = False
    yield from _finish(seq)

# ============================================================
# =================== SELECTION / INSERTION ==================
# ============================================================

def selection_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    # The best-so-far index carries POINTER, the scanning index COMPARING.
    n = len(seq)
    for i in range(n):
        best = i
        yield from _mark(seq, POINTER, best)
        for j in range(i + 1, n):
            yield from _mark(seq, COMPARING, j)
            yield seq.compare(best, j)
            if direction.precedes(seq[j].value, seq[best].value):
                yield from _mark(seq, UNSORTED, best)
                best = j
                yield from _mark(seq, POINTER, best)
            else:
                yield from _mark(seq, UNSORTED, j)
        if best != i:
            yield from _swap(seq, i, best)
            yield from _mark(seq, UNSORTED, best)
        yield from _mark(seq, SORTED, i)
    yield from _finish(seq)


def _insertion(seq: WorkingSequence, direction: Direction, left: int, right: int):
    for i in range(left + 1, right + 1):
        j = i
        while j > left and (yield from _exchange(seq, direction, j - 1, j)):
            j -= 1


def insertion_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    yield from _insertion(seq, direction, 0, len(seq) - 1)
    yield from _finish(seq)


def shell_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n = len(seq)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            j = i
            while j >= gap and (yield from _exchange(seq, direction, j - gap, j)):
                j -= gap
        gap //= 2
    yield from _finish(seq)

# ============================================================
# ======================== QUICK SORT ========================
# ============================================================

def _partition(seq: WorkingSequence, direction: Direction, low: int, high: int):
    """Lomuto partition around ``seq[high]``; returns the pivot's final index."""
    yield from _mark(seq, PIVOT, high)
    pivot = seq[high].value
    boundary = low
    if boundary < high:
        yield from _mark(seq, POINTER, boundary)

    for j in range(low, high):
        if j != boundary:
            yield from _mark(seq, COMPARING, j)
        yield seq.compare(j, high)
        if direction.precedes(seq[j].value, pivot):
            if j != boundary:
                yield seq.swap(boundary, j)
                yield from _mark(seq, UNSORTED, j)
            yield from _mark(seq, UNSORTED, boundary)
            boundary += 1
            if boundary < high:
                yield from _mark(seq, POINTER, boundary)
        elif j != boundary:
            yield from _mark(seq, UNSORTED, j)

    if boundary != high:
        yield seq.swap(boundary, high)
        yield from _mark(seq, UNSORTED, high)
    yield from _mark(seq, SORTED, boundary)
    return boundary


def _quick(seq: WorkingSequence, direction: Direction, low: int, high: int):
    # Recursion depth is O(log n) on average and O(n) on adversarial input.
    if low > high:
        return
    if low == high:
        yield from _mark(seq, SORTED, low)
        return
    split = yield from _partition(seq, direction, low, high)
    yield from _quick(seq, direction, low, split - 1)
    yield from _quick(seq, direction, split + 1, high)


def quick_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    yield from _quick(seq, direction, 0, len(seq) - 1)
    yield from _finish(seq)

# ============================================================
# ========================= HEAP SORT ========================
# ============================================================

def _sift_down(seq: WorkingSequence, direction: Direction, size: int, root: int):
    # Ascending keeps a max-heap, descending a min-heap: both fall out of
    # asking whether the parent precedes its child.
    while True:
        target = root
        children = [c for c in (2 * root + 1, 2 * root + 2) if c < size]
        for child in children:
            if (yield from _compare(seq, direction, child, target)):
                target = child
        if target != root:
            yield from _swap(seq, root, target)
        yield from _mark(seq, UNSORTED, root, *children)
        if target == root:
            return
        root = target


def heap_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n = len(seq)
    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(seq, direction, n, i)
    for end in range(n - 1, 0, -1):
        yield from _swap(seq, 0, end)
        yield from _mark(seq, UNSORTED, 0)
        yield from _mark(seq, SORTED, end)
        yield from _sift_down(seq, direction, end, 0)
    yield from _finish(seq)

# ============================================================
# ======================= MERGE / TIM ========================
# ============================================================

def _merge(seq: WorkingSequence, direction: Direction, low: int, mid: int, high: int):
    # Destination slots are overwritten while their old contents are still
    # needed as comparison sources, hence the snapshots. A compare names the
    # destination slot and carries the snapshot values it actually read.
    left  = seq.elements(low, mid + 1)
    right = seq.elements(mid + 1, high + 1)
    i = j = 0
    k = low
    while i < len(left) and j < len(right):
        yield Compare(k, mid + 1 + j, (left[i].value, right[j].value))
        if direction.precedes(right[j].value, left[i].value):
            source = right[j]
            j += 1
        else:
            source = left[i]
            i += 1
        yield from _overwrite(seq, k, source)
        k += 1
    for source in left[i:] + right[j:]:
        yield from _overwrite(seq, k, source)
        k += 1


def _merge_sort(seq: WorkingSequence, direction: Direction, low: int, high: int):
    if low >= high:
        return
    mid = (low + high) // 2
    yield from _merge_sort(seq, direction, low, mid)
    yield from _merge_sort(seq, direction, mid + 1, high)
    yield from _merge(seq, direction, low, mid, high)


def merge_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    yield from _merge_sort(seq, direction, 0, len(seq) - 1)
    yield from _finish(seq)


def tim_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n = len(seq)
    for start in range(0, n, MIN_RUN):
        end = min(start + MIN_RUN - 1, n - 1)
        yield from _insertion(seq, direction, start, end)
        if end == start:
            continue
        # Flash the finished run
        run = range(start, end + 1)
        yield from _mark(seq, POINTER, *run[:-1])
        yield from _mark(seq, POINTER, run[-1], hold=SWAP_PACE)
        yield from _mark(seq, UNSORTED, *run)

    size = MIN_RUN
    while size < n:
        logger.debug("tim sort: merging runs of %d", size)
        for left in range(0, n, 2 * size):
            mid   = left + size - 1
            right = min(left + 2 * size - 1, n - 1)
            if mid < right:
                yield from _merge(seq, direction, left, mid, right)
        size *= 2
    yield from _finish(seq)

# ============================================================
# ==================== NON-COMPARISON SORTS ==================
# ============================================================

def _distribute(seq: WorkingSequence, keys: list, buckets: int):
    """Stable counting pass: rebuild ``seq`` ordered by ``keys`` in ``range(buckets)``."""
    n = len(seq)
    counts = [0] * buckets
    for index in range(n):
        yield from _mark(seq, COMPARING, index, hold=TALLY_PACE)
        counts[keys[index]] += 1
    for k in range(1, buckets):
        counts[k] += counts[k - 1]

    source = seq.elements()
    output = [None] * n
    for index in range(n - 1, -1, -1):
        counts[keys[index]] -= 1
        output[counts[keys[index]]] = source[index]
    for index, element in enumerate(output):
        yield from _overwrite(seq, index, element)


def counting_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    values = _integer_values(seq, "counting sort")
    if values:
        low, high = min(values), max(values)
        if direction is Direction.ASCENDING:
            keys = [v - low for v in values]
        else:
            keys = [high - v for v in values]
        yield from _distribute(seq, keys, high - low + 1)
    yield from _finish(seq)


def radix_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    values = _integer_values(seq, "radix sort")
    if values:
        low  = min(values)
        span = max(values) - low
        exp  = 1
        while span // exp > 0:
            logger.debug("radix sort: digit pass exp=%d", exp)
            keys = [((bar.value - low) // exp) % RADIX_BASE for bar in seq]
            yield from _distribute(seq, keys, RADIX_BASE)
            exp *= RADIX_BASE

        # Digit passes only ever produce ascending order.
        if direction is Direction.DESCENDING:
            n = len(seq)
            for i in range(n // 2):
                yield from _swap(seq, i, n - 1 - i)
                yield from _mark(seq, UNSORTED, i, n - 1 - i)
    yield from _finish(seq)

# ============================================================
# ========================= CYCLE SORT =======================
# ============================================================

def cycle_sort(seq: WorkingSequence, direction: Direction) -> Steps:
    n = len(seq)
    for start in range(n - 1):
        yield from _mark(seq, POINTER, start)
        # Each round moves the item held at ``start`` to its final slot and
        # brings back the displaced one, until ``start`` holds its own item.
        while True:
            item = seq[start].value
            pos = start
            for i in range(start + 1, n):
                placed = seq.state(i) is SORTED
                if not placed:
                    yield from _mark(seq, COMPARING, i)
                yield seq.compare(i, start)
                if direction.precedes(seq[i].value, item):
                    pos += 1
                if not placed:
                    yield from _mark(seq, UNSORTED, i)
            if pos == start:
                break

            # Equal values already in place would otherwise loop forever.
            while seq[pos].value == item:
                pos += 1

            yield from _mark(seq, PIVOT, pos, hold=CYCLE_TARGET_PACE)
            yield seq.swap(start, pos)
            yield from _mark(seq, SORTED, pos)
            yield from _mark(seq, POINTER, start)
        yield from _mark(seq, SORTED, start)
    yield from _finish(seq)

# ============================================================
# ========================= DISPATCH =========================
# ============================================================

class Algorithm(Enum):
    BUBBLE    = "Bubble Sort"
    SELECTION = "Selection Sort"
    MERGE     = "Merge Sort"
    INSERTION = "Insertion Sort"
    RADIX     = "Radix Sort"
    QUICK     = "Quick Sort"
    HEAP      = "Heap Sort"
    SHELL     = "Shell Sort"
    COUNTING  = "Counting Sort"
    COCKTAIL  = "Cocktail Shaker Sort"
    GNOME     = "Gnome Sort"
    COMB      = "Comb Sort"
    CYCLE     = "Cycle Sort"
    TIM       = "Tim Sort"

    @classmethod
    def lookup(cls, key) -> "Algorithm":
        """Accept a member, its name ("quick") or its display name ("Quick Sort")."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            for member in cls:
                if key.lower() in (member.name.lower(), member.value.lower()):
                    return member
        raise ConfigurationError(f"Unknown algorithm: {key!r}")


Sorter = Callable[[WorkingSequence, Direction], Steps]

SORTERS: Dict[Algorithm, Sorter] = {
    Algorithm.BUBBLE:    bubble_sort,
    Algorithm.SELECTION: selection_sort,
    Algorithm.MERGE:     merge_sort,
    Algorithm.INSERTION: insertion_sort,
    Algorithm.RADIX:     radix_sort,
    Algorithm.QUICK:     quick_sort,
    Algorithm.HEAP:      heap_sort,
    Algorithm.SHELL:     shell_sort,
    Algorithm.COUNTING:  counting_sort,
    Algorithm.COCKTAIL:  cocktail_sort,
    Algorithm.GNOME:     gnome_sort,
    Algorithm.COMB:      comb_sort,
    Algorithm.CYCLE:     cycle_sort,
    Algorithm.TIM:       tim_sort,
}


def get_generator(algorithm, seq: WorkingSequence, direction: Direction) -> Steps:
    sorter = SORTERS[Algorithm.lookup(algorithm)]
    if len(seq) <= 1:
        # Nothing to order: confirm the lone bar, if any, and finish.
        return _finish(seq)
    return sorter(seq, direction)
