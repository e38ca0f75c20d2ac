import random

import pytest

from algorithms import SORTING
from algorithms.bubble_sort import bubble_sort
from algorithms.insertion_sort import insertion_sort
from algorithms.quick_sort import quick_sort
from algorithms.shell_sort import shell_sort
from algorithms.stats import SortStats
from conftest import drain

ALL_SORTS = [info.fn for info in SORTING]


@pytest.mark.parametrize("fn", ALL_SORTS)
def test_sorts_textbook_example(fn) -> None:
    stats = SortStats()
    steps = drain(fn, [5, 3, 1, 4, 2], stats)

    assert steps[-1].snapshot == [1, 2, 3, 4, 5]
    assert steps[-1].is_final
    assert steps[-1].highlight == ()
    assert stats.swaps >= 1
    assert stats.comparisons >= 4


@pytest.mark.parametrize("fn", ALL_SORTS)
@pytest.mark.parametrize("seed", range(8))
def test_sorts_random_multisets(fn, seed) -> None:
    rng = random.Random(seed)
    values = [rng.randint(1, 9) for _ in range(rng.randint(2, 14))]

    steps = drain(fn, values, SortStats())

    assert steps[-1].snapshot == sorted(values)
    assert all(sorted(s.snapshot) == sorted(values) for s in steps)


@pytest.mark.parametrize("fn", ALL_SORTS)
@pytest.mark.parametrize("values", [[], [7]])
def test_trivial_inputs_yield_only_the_final_step(fn, values) -> None:
    steps = drain(fn, values, SortStats())

    assert len(steps) == 1
    assert steps[0].snapshot == values
    assert steps[0].is_final


@pytest.mark.parametrize("fn", ALL_SORTS)
def test_caller_input_is_not_mutated(fn) -> None:
    values = [4, 1, 3, 2]
    drain(fn, values, SortStats())
    assert values == [4, 1, 3, 2]


@pytest.mark.parametrize("fn", ALL_SORTS)
def test_replay_is_deterministic(fn) -> None:
    first = [(s.snapshot, s.description, s.highlight) for s in fn([9, 2, 7, 2, 5, 1], SortStats())]
    second = [(s.snapshot, s.description, s.highlight) for s in fn([9, 2, 7, 2, 5, 1], SortStats())]
    assert first == second


def test_only_last_step_is_final() -> None:
    steps = drain(quick_sort, [3, 9, 1, 7, 5, 2], SortStats())
    assert [s.is_final for s in steps].count(True) == 1


def test_bubble_sort_compares_before_swapping() -> None:
    steps = drain(bubble_sort, [5, 3, 1, 4, 2], SortStats())

    assert steps[0].highlight == (0, 1)
    assert steps[0].description == "Compare 5 and 3"
    assert steps[0].snapshot == [5, 3, 1, 4, 2]
    assert steps[1].highlight == (0, 1)
    assert steps[1].snapshot == [3, 5, 1, 4, 2]


def test_bubble_sort_exits_after_a_clean_pass() -> None:
    stats = SortStats()
    steps = drain(bubble_sort, [1, 2, 3, 4], stats)

    assert stats.comparisons == 3
    assert stats.swaps == 0
    assert len(steps) == 4


def test_quick_sort_starts_with_middle_pivot() -> None:
    stats = SortStats()
    gen = quick_sort([5, 3, 1, 4, 2], stats)
    first = next(gen)

    assert first.highlight == (2,)
    assert stats.pivot_index == 2
    assert stats.recursion_depth == 1

    second = next(gen)
    assert second.highlight == (2, 4)
    assert second.snapshot == [5, 3, 2, 4, 1]


def test_quick_sort_counts_every_recursive_call() -> None:
    stats = SortStats()
    drain(quick_sort, [5, 3, 1, 4, 2], stats)
    assert stats.recursion_depth > 1


def test_shell_sort_uses_knuth_gaps() -> None:
    stats = SortStats()
    gen = shell_sort([5, 3, 1, 4, 2], stats)
    first = next(gen)

    assert stats.current_gap == 4
    assert first.highlight == (4,)

    for _ in gen:
        pass
    assert stats.current_gap == 1


def test_insertion_sort_step_sequence() -> None:
    stats = SortStats()
    steps = drain(insertion_sort, [2, 1], stats)

    assert [s.highlight for s in steps] == [(1,), (1, 0), (0,), ()]
    assert [s.snapshot for s in steps] == [[2, 1], [2, 1], [1, 2], [1, 2]]
    assert stats.comparisons == 1
    assert stats.swaps == 1


def test_snapshots_do_not_alias_each_other() -> None:
    steps = drain(insertion_sort, [3, 2, 1], SortStats())
    before = list(steps[1].snapshot)

    steps[0].snapshot.append(99)

    assert steps[1].snapshot == before
