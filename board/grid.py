"""
grid.py — Pathfinding Grid
==========================
A grid is a plain list of rows, each row a list of CellType tags.  The
search algorithms read and re-tag cells; the renderer colours a cell by
its tag alone.

Design decisions:
  - CellType is a str-valued Enum so a grid serialises to JSON as-is and
    compares equal to the raw tag strings ("wall", "start", …).
  - Coordinates are (row, col) everywhere.
  - Only `start`, `end` and `wall` are user-owned tags.  `visited` and
    `path` are written by the algorithms and wiped by clear_search().
"""

from enum import Enum
from typing import List, Optional, Tuple


# ---------------------------------------------------------------------------
# Cell tags: one per colour in the visual encoding palette
# ---------------------------------------------------------------------------
class CellType(str, Enum):
    EMPTY   = "empty"     # open floor
    WALL    = "wall"      # user-placed obstacle
    VISITED = "visited"   # discovered by the search
    PATH    = "path"      # on the reconstructed route
    START   = "start"     # search origin
    END     = "end"       # search goal


Grid = List[List[CellType]]

# up, down, left, right: neighbour expansion order
DIRECTIONS: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def new_grid(rows: int = 12, cols: int = 15) -> Grid:
    """Empty grid with `start` top-left and `end` bottom-right."""
    grid: Grid = [[CellType.EMPTY for _ in range(cols)] for _ in range(rows)]
    if rows and cols:
        grid[rows - 1][cols - 1] = CellType.END
        grid[0][0] = CellType.START      # a 1x1 grid keeps only the start
    return grid


def clone_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def in_bounds(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])


def find_cell(grid: Grid, tag: CellType) -> Optional[Tuple[int, int]]:
    """First (row, col) carrying `tag`, scanning row-major."""
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell == tag:
                return r, c
    return None


def toggle_wall(grid: Grid, row: int, col: int) -> bool:
    """Flip empty <-> wall.  Returns False for start/end or out-of-range cells."""
    if not in_bounds(grid, row, col):
        return False
    cell = grid[row][col]
    if cell in (CellType.START, CellType.END):
        return False
    grid[row][col] = CellType.EMPTY if cell == CellType.WALL else CellType.WALL
    return True


def clear_search(grid: Grid) -> Grid:
    """Copy of `grid` with visited / path tags reverted to empty.  Walls survive."""
    return [
        [CellType.EMPTY if cell in (CellType.VISITED, CellType.PATH) else cell for cell in row]
        for row in grid
    ]
