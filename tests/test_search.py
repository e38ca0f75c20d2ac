import pytest

from algorithms.bfs import bfs
from algorithms.bidirectional_bfs import bidirectional_bfs
from algorithms.dfs import dfs
from algorithms.stats import SearchStats
from board import CellType, clone_grid, find_cell, new_grid
from conftest import drain, walled_grid

ALL_SEARCHES = [bfs, dfs, bidirectional_bfs]


def path_cells(grid):
    return {(r, c) for r, row in enumerate(grid) for c, cell in enumerate(row) if cell == CellType.PATH}


def visits(steps):
    return [s.description for s in steps if s.description.startswith("Visit")]


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("fn", ALL_SEARCHES)
def test_search_reaches_the_far_corner(fn) -> None:
    stats = SearchStats()
    steps = drain(fn, new_grid(3, 3), stats)
    final = steps[-1]

    assert final.is_final
    assert final.snapshot[0][0] == CellType.START
    assert final.snapshot[2][2] == CellType.END
    assert len(path_cells(final.snapshot)) == stats.path_length - 1
    assert stats.path_length >= 4


@pytest.mark.parametrize("fn", ALL_SEARCHES)
def test_walled_off_start_reports_no_path(fn) -> None:
    steps = drain(fn, walled_grid(), SearchStats())

    assert [s.is_final for s in steps].count(True) == 1
    assert steps[-1].description == "No path found"
    assert all(not path_cells(s.snapshot) for s in steps)


@pytest.mark.parametrize("fn", [bfs, dfs])
def test_boxed_in_start_yields_a_single_step(fn) -> None:
    steps = drain(fn, walled_grid(), SearchStats())
    assert len(steps) == 1


@pytest.mark.parametrize("fn", ALL_SEARCHES)
@pytest.mark.parametrize("grid", [new_grid(1, 1), [], [[CellType.EMPTY, CellType.EMPTY]]])
def test_degenerate_grids_terminate(fn, grid) -> None:
    stats = SearchStats()
    steps = drain(fn, grid, stats)

    assert len(steps) == 1
    assert steps[0].is_final
    assert steps[0].description.startswith("No path found")
    assert stats.path_length == 0


@pytest.mark.parametrize("fn", ALL_SEARCHES)
def test_caller_grid_is_not_mutated(fn) -> None:
    grid = new_grid(4, 4)
    before = clone_grid(grid)
    drain(fn, grid, SearchStats())
    assert grid == before


@pytest.mark.parametrize("fn", ALL_SEARCHES)
def test_walls_are_never_entered(fn) -> None:
    grid = new_grid(5, 5)
    for r in range(4):
        grid[r][2] = CellType.WALL

    steps = drain(fn, grid, SearchStats())

    for step in steps:
        assert all(step.snapshot[r][2] == CellType.WALL for r in range(4))
    assert steps[-1].description != "No path found"


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
def test_bfs_open_grid_finds_shortest_path() -> None:
    stats = SearchStats()
    steps = drain(bfs, new_grid(3, 3), stats)

    assert stats.path_length == 4
    assert stats.visited_nodes == 7
    assert steps[-1].description == "Reached the end! Path length: 4"
    assert path_cells(steps[-1].snapshot) == {(1, 0), (2, 0), (2, 1)}


def test_bfs_visit_order_is_breadth_first() -> None:
    steps = drain(bfs, new_grid(3, 3), SearchStats())

    assert visits(steps) == [
        "Visit (1, 0)", "Visit (0, 1)", "Visit (2, 0)", "Visit (1, 1)",
        "Visit (0, 2)", "Visit (2, 1)", "Visit (1, 2)",
    ]


def test_bfs_marks_path_one_cell_per_step() -> None:
    steps = drain(bfs, new_grid(3, 3), SearchStats())
    marks = [s for s in steps if s.description.startswith("Mark path")]

    assert [len(path_cells(s.snapshot)) for s in marks] == [1, 2, 3]


def test_bfs_shortest_path_on_larger_grid() -> None:
    stats = SearchStats()
    drain(bfs, new_grid(12, 15), stats)
    assert stats.path_length == 11 + 14


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------
def test_dfs_flips_direction_order_on_every_pop() -> None:
    stats = SearchStats()
    steps = drain(dfs, new_grid(3, 3), stats)

    assert visits(steps) == [
        "Visit (0, 1)", "Visit (1, 0)", "Visit (2, 0)",
        "Visit (1, 1)", "Visit (1, 2)", "Visit (2, 1)",
    ]
    assert stats.visited_nodes == 7
    assert stats.path_length == 4
    assert path_cells(steps[-1].snapshot) == {(1, 0), (1, 1), (2, 1)}


def test_dfs_fixed_direction_order() -> None:
    steps = list(dfs(new_grid(3, 3), SearchStats(), flip_directions=False))

    assert visits(steps) == [
        "Visit (1, 0)", "Visit (0, 1)", "Visit (1, 1)", "Visit (0, 2)", "Visit (1, 2)",
    ]


def test_dfs_direction_state_does_not_leak_between_runs() -> None:
    first = [s.description for s in dfs(new_grid(4, 4), SearchStats())]
    second = [s.description for s in dfs(new_grid(4, 4), SearchStats())]
    assert first == second


# ---------------------------------------------------------------------------
# Bidirectional BFS
# ---------------------------------------------------------------------------
def test_bidirectional_frontiers_meet_in_the_middle() -> None:
    stats = SearchStats()
    steps = drain(bidirectional_bfs, new_grid(3, 3), stats)

    assert stats.path_length == 4
    assert stats.max_frontier >= 2
    assert steps[-1].description.startswith("Frontiers met at (1, 1)")
    assert path_cells(steps[-1].snapshot) == {(1, 0), (1, 1), (1, 2)}


def test_bidirectional_keeps_endpoint_tags() -> None:
    steps = drain(bidirectional_bfs, new_grid(4, 6), SearchStats())

    for step in steps:
        assert find_cell(step.snapshot, CellType.START) == (0, 0)
        assert find_cell(step.snapshot, CellType.END) == (3, 5)


def test_bidirectional_adjacent_endpoints() -> None:
    stats = SearchStats()
    steps = drain(bidirectional_bfs, new_grid(1, 2), stats)

    assert stats.path_length == 1
    assert steps[-1].is_final
    assert not path_cells(steps[-1].snapshot)
