"""
dfs.py — Depth-First Search
=============================
Generator-based DFS over a 4-connected grid using an explicit stack
(no Python recursion limit issues).  Cells are marked visited when they
are pushed, so each cell enters the stack at most once.

Traversal order quirk:
  The direction list is reversed IN PLACE before every expansion, so
  neighbour order alternates between (right, left, down, up) and
  (up, down, left, right) from one pop to the next.  The visitation order
  this produces is what the visualizer has always shown, so it is kept.
  The list is copied per run (nothing carries over between runs), and
  `flip_directions=False` gives the plain fixed order.

Stats:
  • visited_nodes – starts at 1 (the start cell counts)
  • max_frontier  – largest stack size
  • path_length   – edges on the path found (not necessarily shortest)
"""

from typing import Dict, Generator, List, Optional, Tuple

from algorithms.step import Step, grid_step
from algorithms.stats import SearchStats
from board.grid import CellType, DIRECTIONS, Grid, clone_grid, find_cell, in_bounds


Coord = Tuple[int, int]

PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",                    # 0
    "    stack ← [start];  visited ← {start}",       # 1
    "    while stack is not empty:",                 # 2
    "        cell ← stack.pop()",                    # 3
    "        directions.reverse()",                  # 4
    "        for nbr in directions:",                # 5
    "            if nbr == end: return path",        # 6
    "            if nbr is empty and not visited:",  # 7
    "                visited.add(nbr)",              # 8
    "                parent[nbr] ← cell",            # 9
    "                stack.push(nbr)",               # 10
    "    return NOT FOUND",                          # 11
]


def dfs(grid: Grid, stats: SearchStats, flip_directions: bool = True) -> Generator[Step, None, None]:
    work  = clone_grid(grid)
    start = find_cell(work, CellType.START)
    if start is None:
        yield grid_step(work, "No path found: the grid has no start cell", is_final=True)
        return

    directions = list(DIRECTIONS)
    stack      = [start]
    visited    = {start}
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    end: Optional[Coord] = None
    stats.visited_nodes += 1
    stats.max_frontier = max(stats.max_frontier, 1)

    while stack and end is None:
        r, c = stack.pop()

        if flip_directions:
            directions.reverse()

        for dr, dc in directions:
            nr, nc = r + dr, c + dc
            if not in_bounds(work, nr, nc):
                continue

            if work[nr][nc] == CellType.END:
                parent[(nr, nc)] = (r, c)
                end = (nr, nc)
                break

            if work[nr][nc] == CellType.EMPTY and (nr, nc) not in visited:
                visited.add((nr, nc))
                parent[(nr, nc)] = (r, c)
                stack.append((nr, nc))
                work[nr][nc] = CellType.VISITED
                stats.visited_nodes += 1
                stats.max_frontier = max(stats.max_frontier, len(stack))
                yield grid_step(work, f"Visit ({nr}, {nc})")

    if end is None:
        yield grid_step(work, "No path found", is_final=True)
        return

    path = _reconstruct(parent, end)
    for r, c in path[1:-1]:
        work[r][c] = CellType.PATH
        yield grid_step(work, f"Mark path ({r}, {c})")

    stats.path_length = len(path) - 1
    yield grid_step(work, f"Path found! Length: {stats.path_length}", is_final=True)


# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[Coord, Optional[Coord]], target: Coord) -> List[Coord]:
    path, cur = [], target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
