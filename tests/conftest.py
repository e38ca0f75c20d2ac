import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from algorithms import get_domain
from board import CellType, Item, new_board, new_grid
from engine import PlaybackController, VirtualScheduler


def drain(fn, state, stats):
    """Run a producer to completion and return its steps."""
    return list(fn(state, stats))


def walled_grid():
    """3x3 grid whose start cell is boxed in by walls."""
    grid = new_grid(3, 3)
    grid[0][1] = CellType.WALL
    grid[1][0] = CellType.WALL
    return grid


def textbook_board():
    items = [Item(0, 2, 3), Item(1, 3, 4), Item(2, 4, 5)]
    return new_board(items, capacity=5)


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def sort_controller(scheduler) -> PlaybackController:
    ctl = PlaybackController(get_domain("sort"), scheduler)
    ctl.load([5, 3, 1, 4, 2])
    return ctl


@pytest.fixture
def search_controller(scheduler) -> PlaybackController:
    return PlaybackController(get_domain("search"), scheduler, state_factory=lambda: new_grid(3, 3))


@pytest.fixture
def knapsack_controller(scheduler) -> PlaybackController:
    return PlaybackController(get_domain("knapsack"), scheduler, state_factory=textbook_board)
