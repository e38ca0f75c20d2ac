"""
bidirectional_bfs.py — Bidirectional BFS
==========================================
Two BFS frontiers expand in lock-step — one from the start cell, one
from the end cell.  Every round pops ONE cell from each non-empty queue
(start side first).  The search stops the moment the frontiers touch:

  • a popped cell was already reached by the other side, or
  • a freshly discovered neighbour was already reached by the other side.

Any non-wall cell can be discovered by either side; only plain cells are
re-tagged VISITED so start / end keep their colours.

Final path = start-side parent chain (reversed) + meeting cell +
end-side parent chain.  `path_length` is its edge count.
`max_frontier` tracks the combined size of both queues.
"""

from collections import deque
from typing import Deque, Dict, Generator, List, Optional, Set, Tuple

from algorithms.step import Step, grid_step
from algorithms.stats import SearchStats
from board.grid import CellType, DIRECTIONS, Grid, clone_grid, find_cell, in_bounds


Coord = Tuple[int, int]

PSEUDOCODE: List[str] = [
    "def BidiBFS(grid, start, end):",                # 0
    "    qS ← [start];  visitedS ← {start}",         # 1
    "    qE ← [end];    visitedE ← {end}",           # 2
    "    while qS or qE:",                           # 3
    "        for (q, visited, other) in S, E:",      # 4
    "            cell ← q.dequeue()",                # 5
    "            if cell in other: meet at cell",    # 6
    "            for nbr not visited and not wall:", # 7
    "                visited.add(nbr); q.enqueue(nbr)", # 8
    "                if nbr in other: meet at nbr",  # 9
    "    return NOT FOUND",                          # 10
]


def bidirectional_bfs(grid: Grid, stats: SearchStats) -> Generator[Step, None, None]:
    work  = clone_grid(grid)
    start = find_cell(work, CellType.START)
    end   = find_cell(work, CellType.END)
    if start is None or end is None:
        yield grid_step(work, "No path found: the grid needs a start and an end cell", is_final=True)
        return

    # start side
    qS:       Deque[Coord] = deque([start])
    visitedS: Set[Coord]   = {start}
    parentS:  Dict[Coord, Optional[Coord]] = {start: None}

    # end side
    qE:       Deque[Coord] = deque([end])
    visitedE: Set[Coord]   = {end}
    parentE:  Dict[Coord, Optional[Coord]] = {end: None}

    stats.max_frontier = max(stats.max_frontier, 2)
    sides = [
        (qS, visitedS, parentS, visitedE, "start"),
        (qE, visitedE, parentE, visitedS, "end"),
    ]
    meeting: Optional[Coord] = None

    while (qS or qE) and meeting is None:
        for queue, visited, parent, other, label in sides:
            if not queue:
                continue

            r, c = queue.popleft()
            if (r, c) in other:
                meeting = (r, c)
                break

            for dr, dc in DIRECTIONS:
                nbr = (r + dr, c + dc)
                if not in_bounds(work, *nbr) or nbr in visited:
                    continue
                if work[nbr[0]][nbr[1]] == CellType.WALL:
                    continue

                visited.add(nbr)
                parent[nbr] = (r, c)
                queue.append(nbr)
                if work[nbr[0]][nbr[1]] not in (CellType.START, CellType.END):
                    work[nbr[0]][nbr[1]] = CellType.VISITED
                stats.visited_nodes += 1
                stats.max_frontier = max(stats.max_frontier, len(qS) + len(qE))
                yield grid_step(work, f"Visit ({nbr[0]}, {nbr[1]}) from the {label} side")

                if nbr in other:
                    meeting = nbr
                    break

            if meeting is not None:
                break

    if meeting is None:
        yield grid_step(work, "No path found", is_final=True)
        return

    path = _build_path(parentS, parentE, meeting)
    for r, c in path:
        if work[r][c] not in (CellType.START, CellType.END):
            work[r][c] = CellType.PATH
            yield grid_step(work, f"Mark path ({r}, {c})")

    stats.path_length = len(path) - 1
    yield grid_step(
        work,
        f"Frontiers met at {meeting}! Path length: {stats.path_length}",
        is_final=True,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _chain(parent: Dict[Coord, Optional[Coord]], cell: Coord) -> List[Coord]:
    """Ancestors of `cell`, nearest first, excluding `cell` itself."""
    chain, cur = [], parent.get(cell)
    while cur is not None:
        chain.append(cur)
        cur = parent.get(cur)
    return chain


def _build_path(
    parentS: Dict[Coord, Optional[Coord]],
    parentE: Dict[Coord, Optional[Coord]],
    meeting: Coord,
) -> List[Coord]:
    start_half = _chain(parentS, meeting)
    start_half.reverse()
    return start_half + [meeting] + _chain(parentE, meeting)
