"""
board/
------
Data layer.  One module per domain:

    from board import random_array                      # sorting
    from board import CellType, new_grid                # pathfinding
    from board import Item, Cell, KnapsackBoard         # dynamic programming
"""

from board.array    import random_array, clone_array
from board.grid     import (
    CellType, Grid, DIRECTIONS,
    new_grid, clone_grid, find_cell, in_bounds, toggle_wall, clear_search,
)
from board.knapsack import Item, Cell, KnapsackBoard, random_items, new_board

__all__ = [
    "random_array", "clone_array",
    "CellType",     "Grid",        "DIRECTIONS",
    "new_grid",     "clone_grid",  "find_cell",   "in_bounds",
    "toggle_wall",  "clear_search",
    "Item",         "Cell",        "KnapsackBoard",
    "random_items", "new_board",
]
