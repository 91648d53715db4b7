import pytest

from sortanimation import (
    SORTERS,
    Algorithm,
    Compare,
    Complete,
    ConfigurationError,
    Direction,
    Overwrite,
    SetState,
    Swap,
    VisualState,
    WorkingSequence,
    describe,
    sort_values,
)
from sortanimation.model import MARKERS

from conftest import DIRECTIONS, SHAPES, build_shape, record

ALGORITHMS = list(Algorithm)
COMPARISON_SORTS = [a for a in Algorithm if a not in (Algorithm.COUNTING, Algorithm.RADIX)]


@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("direction", DIRECTIONS)
@pytest.mark.parametrize("shape", SHAPES)
def test_sorts_every_shape(algorithm, direction, shape):
    values = build_shape(shape)
    _, seq, _ = record(algorithm, values, direction)
    expected = sorted(values, reverse=direction is Direction.DESCENDING)
    assert seq.values() == expected
    assert seq.all_sorted()


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_reference_example(algorithm):
    values = [5, 2, 8, 2, 9, 1, 5, 5, 3, 2]
    assert sort_values(values, algorithm) == [1, 2, 2, 2, 3, 5, 5, 5, 8, 9]


@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("direction", DIRECTIONS)
def test_large_random_input(algorithm, direction, rng):
    values = rng.permutation(200).tolist()
    assert sort_values(values, algorithm, direction) == sorted(values, reverse=direction is Direction.DESCENDING)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_direction_symmetry(algorithm):
    values = build_shape("duplicates", 30)
    ascending = sort_values(values, algorithm, Direction.ASCENDING)
    descending = sort_values(values, algorithm, Direction.DESCENDING)
    assert descending == ascending[::-1]


@pytest.mark.parametrize("algorithm", COMPARISON_SORTS)
def test_comparison_sorts_handle_strings(algorithm):
    words = ["pear", "apple", "fig", "kiwi", "apple", "banana"]
    assert sort_values(words, algorithm) == sorted(words)


@pytest.mark.parametrize("algorithm", [Algorithm.COUNTING, Algorithm.RADIX])
def test_non_comparison_sorts_reject_strings(algorithm):
    with pytest.raises(ConfigurationError):
        sort_values(["b", "a"], algorithm)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("values", [[], [3]])
def test_trivial_inputs_go_straight_to_complete(algorithm, values):
    _, seq, events = record(algorithm, values)
    expected = [SetState(0, VisualState.SORTED)] * len(values) + [Complete()]
    assert [e.stamped(-1) for e in events] == expected
    assert seq.values() == values


def test_tim_sort_skips_flash_for_single_element_run():
    # 33 elements leave a one-element trailing run at index 32
    _, _, events = record(Algorithm.TIM, build_shape("random", 33))
    assert not any(
        isinstance(e, SetState) and e.index == 32 and e.state is VisualState.POINTER for e in events
    )


@pytest.mark.parametrize("algorithm", [Algorithm.BUBBLE, Algorithm.COCKTAIL])
def test_adaptive_early_exit_on_sorted_input(algorithm):
    n = 25
    _, _, events = record(algorithm, list(range(n)))
    compares = [e for e in events if isinstance(e, Compare)]
    assert not any(isinstance(e, Swap) for e in events)
    # a single pass is enough to prove the input sorted
    assert len(compares) == n - 1


@pytest.mark.parametrize("algorithm", [Algorithm.BUBBLE, Algorithm.COCKTAIL])
def test_early_exit_does_fewer_compares_than_reversed(algorithm):
    _, _, sorted_events = record(algorithm, list(range(20)))
    _, _, reversed_events = record(algorithm, list(range(20, 0, -1)))
    count = lambda events: sum(isinstance(e, Compare) for e in events)
    assert count(sorted_events) < count(reversed_events)


def test_cycle_sort_all_duplicates_terminates():
    assert sort_values([2, 2, 2, 2], Algorithm.CYCLE) == [2, 2, 2, 2]


@pytest.mark.parametrize("direction", DIRECTIONS)
def test_cycle_sort_duplicate_heavy(direction):
    values = [3, 1, 3, 3, 2, 1, 3, 2, 2, 1, 3, 3, 1]
    expected = sorted(values, reverse=direction is Direction.DESCENDING)
    assert sort_values(values, Algorithm.CYCLE, direction) == expected


def test_cycle_sort_swaps_at_most_once_per_element():
    values = build_shape("random", 30)
    _, _, events = record(Algorithm.CYCLE, values)
    assert sum(isinstance(e, Swap) for e in events) <= len(values)


def test_counting_sort_negative_range():
    values = [3, -5, 0, -1, 7, -5, 2]
    assert sort_values(values, Algorithm.COUNTING) == sorted(values)
    assert sort_values(values, Algorithm.COUNTING, Direction.DESCENDING) == sorted(values, reverse=True)


def test_radix_descending_reverses_with_swaps():
    values = [170, 45, 75, 90, 802, 24, 2, 66]
    _, seq, events = record(Algorithm.RADIX, values, Direction.DESCENDING)
    assert seq.values() == sorted(values, reverse=True)
    # digit passes only overwrite; the reversal post-pass is all swaps
    assert sum(isinstance(e, Swap) for e in events) == len(values) // 2


@pytest.mark.parametrize("algorithm", [Algorithm.MERGE, Algorithm.TIM, Algorithm.COUNTING, Algorithm.RADIX])
def test_rebuild_based_sorts_overwrite(algorithm):
    _, _, events = record(algorithm, build_shape("random", 70))
    assert any(isinstance(e, Overwrite) for e in events)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("shape", ["random", "duplicates", "reversed"])
def test_swaps_and_overwrites_are_marked_first(algorithm, shape):
    initial, _, events = record(algorithm, build_shape(shape, 50))
    shadow = WorkingSequence(initial)
    for event in events:
        if isinstance(event, Swap):
            assert shadow.state(event.i) in MARKERS
            assert shadow.state(event.j) in MARKERS
        elif isinstance(event, Overwrite):
            assert shadow.state(event.index) in MARKERS
        shadow.apply(event)
    assert all(bar.state is VisualState.SORTED for bar in shadow)


def test_selection_sort_shows_best_and_scan_markers_together():
    initial, _, events = record(Algorithm.SELECTION, [4, 3, 1, 2])
    shadow = WorkingSequence(initial)
    both_visible = False
    for event in events:
        shadow.apply(event)
        states = {bar.state for bar in shadow}
        if VisualState.POINTER in states and VisualState.COMPARING in states:
            both_visible = True
    assert both_visible
    assert sum(1 for bar in shadow if bar.state is VisualState.POINTER) == 0


def test_quick_sort_uses_last_element_as_pivot():
    _, _, events = record(Algorithm.QUICK, [3, 1, 2])
    first_pivot = next(e for e in events if isinstance(e, SetState) and e.state is VisualState.PIVOT)
    assert first_pivot.index == 2


def test_every_algorithm_is_dispatchable():
    assert set(SORTERS) == set(Algorithm)
    assert len(Algorithm) == 14


@pytest.mark.parametrize("key", ["quick", "QUICK", "Quick Sort", Algorithm.QUICK])
def test_lookup_accepts_names(key):
    assert Algorithm.lookup(key) is Algorithm.QUICK


def test_lookup_rejects_unknown():
    with pytest.raises(ConfigurationError):
        Algorithm.lookup("bogo")


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_catalog_describes_every_algorithm(algorithm):
    info = describe(algorithm)
    assert info.name == algorithm.value
    assert info.time_complexity.startswith("O(")
    assert info.description


def test_catalog_stability_flags():
    assert describe("merge").stable
    assert not describe("quick").stable


@pytest.mark.parametrize("algorithm", [a for a in ALGORITHMS if a not in (Algorithm.MERGE, Algorithm.TIM)])
def test_compare_indices_hold_compared_values(algorithm):
    initial, _, events = record(algorithm, build_shape("duplicates", 40))
    shadow = WorkingSequence(initial)
    for event in events:
        if isinstance(event, Compare):
            assert event.values == (shadow[event.i].value, shadow[event.j].value)
        shadow.apply(event)


@pytest.mark.parametrize("algorithm", [Algorithm.MERGE, Algorithm.TIM])
def test_merge_compares_report_snapshot_values(algorithm):
    initial, _, events = record(algorithm, build_shape("random", 70))
    shadow = WorkingSequence(initial)
    for event in events:
        if isinstance(event, Compare):
            # the right operand is never overwritten before it is compared
            assert shadow[event.j].value == event.values[1]
            assert len(event.values) == 2
        shadow.apply(event)


def test_merge_compare_after_overwrite_names_real_operands():
    _, _, events = record(Algorithm.MERGE, [3, 1, 4, 2])
    compares = [e for e in events if isinstance(e, Compare)]
    assert [c.values for c in compares] == [(3, 1), (4, 2), (1, 2), (3, 2), (3, 4)]
    assert (compares[-1].i, compares[-1].j) == (2, 3)
