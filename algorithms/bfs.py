"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over a 4-connected grid.  Yields a Step at every
meaningful event:
  1. Discover an empty cell      →  tag it VISITED
  2. Reach the end cell          →  walk the parent map back to start
  3. One step per path cell      →  tag it PATH (start-to-end order)
  4. Final step                  →  path length, or "no path"

Walls are never entered.  The end cell is recognised as a neighbour,
so it is never tagged VISITED itself.

Stats:
  • visited_nodes – cells discovered
  • max_frontier  – largest queue size
  • path_length   – edges on the shortest path (hop count)
"""

from collections import deque
from typing import Dict, Generator, List, Optional, Tuple

from algorithms.step import Step, grid_step
from algorithms.stats import SearchStats
from board.grid import CellType, DIRECTIONS, Grid, clone_grid, find_cell, in_bounds


Coord = Tuple[int, int]

PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",                    # 0
    "    queue ← [start];  visited ← {start}",       # 1
    "    while queue is not empty:",                 # 2
    "        cell ← queue.dequeue()",                # 3
    "        for nbr in up, down, left, right:",     # 4
    "            if nbr == end: return path",        # 5
    "            if nbr is empty and not visited:",  # 6
    "                visited.add(nbr)",              # 7
    "                parent[nbr] ← cell",            # 8
    "                queue.enqueue(nbr)",            # 9
    "    return NOT FOUND",                          # 10
]


def bfs(grid: Grid, stats: SearchStats) -> Generator[Step, None, None]:
    work  = clone_grid(grid)
    start = find_cell(work, CellType.START)
    if start is None:
        yield grid_step(work, "No path found: the grid has no start cell", is_final=True)
        return

    queue   = deque([start])
    visited = {start}
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    end: Optional[Coord] = None
    stats.max_frontier = max(stats.max_frontier, 1)

    while queue and end is None:
        r, c = queue.popleft()

        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if not in_bounds(work, nr, nc) or (nr, nc) in visited:
                continue

            if work[nr][nc] == CellType.END:
                parent[(nr, nc)] = (r, c)
                end = (nr, nc)
                break

            if work[nr][nc] == CellType.EMPTY:
                visited.add((nr, nc))
                parent[(nr, nc)] = (r, c)
                queue.append((nr, nc))
                work[nr][nc] = CellType.VISITED
                stats.visited_nodes += 1
                stats.max_frontier = max(stats.max_frontier, len(queue))
                yield grid_step(work, f"Visit ({nr}, {nc})")

    if end is None:
        yield grid_step(work, "No path found", is_final=True)
        return

    path = _reconstruct(parent, end)
    for r, c in path[1:-1]:
        work[r][c] = CellType.PATH
        yield grid_step(work, f"Mark path ({r}, {c})")

    stats.path_length = len(path) - 1
    yield grid_step(work, f"Reached the end! Path length: {stats.path_length}", is_final=True)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[Coord, Optional[Coord]], target: Coord) -> List[Coord]:
    path = []
    cur: Optional[Coord] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
