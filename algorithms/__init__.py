"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import DOMAINS, get_domain

There are three domains, each with its own Catalog:

    "sort"     – 1-D array   (bubble, quick, shell, insertion)
    "search"   – 2-D grid    (BFS, DFS, bidirectional BFS)
    "knapsack" – DP table    (0/1 knapsack)

AlgoInfo is a lightweight dataclass.  The engine consumes it, so adding
a new algorithm is literally: write the generator, add one entry to the
right catalog.  That's the plugin system.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort       import bubble_sort       as _bubble, PSEUDOCODE as _bubble_pc
from algorithms.quick_sort        import quick_sort        as _quick,  PSEUDOCODE as _quick_pc
from algorithms.shell_sort        import shell_sort        as _shell,  PSEUDOCODE as _shell_pc
from algorithms.insertion_sort    import insertion_sort    as _insert, PSEUDOCODE as _insert_pc
from algorithms.bfs               import bfs               as _bfs,    PSEUDOCODE as _bfs_pc
from algorithms.dfs               import dfs               as _dfs,    PSEUDOCODE as _dfs_pc
from algorithms.bidirectional_bfs import bidirectional_bfs as _bibfs,  PSEUDOCODE as _bibfs_pc
from algorithms.knapsack          import knapsack          as _knap,   PSEUDOCODE as _knap_pc

from algorithms.stats import SortStats, SearchStats, KnapsackStats
from algorithms.step  import Step
from board import (
    Grid, KnapsackBoard,
    random_array, clone_array, new_grid, clone_grid, clear_search, new_board,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # catalog key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function: fn(state, stats)
    pseudocode:       List[str]              # documentation shown beside the animation
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str      = ""          # e.g. "O(n²)"
    complexity_space: str      = ""
    description:      str      = ""          # one-liner for the UI card

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# Catalog — ordered, read-only collection of AlgoInfo
# ---------------------------------------------------------------------------
class Catalog:
    """Entries keep their registration order; the first one is the default."""

    def __init__(self, entries: List[AlgoInfo]):
        if not entries:
            raise ValueError("A catalog needs at least one algorithm")
        self._entries: Dict[str, AlgoInfo] = {}
        for info in entries:
            if info.key in self._entries:
                raise ValueError(f"Duplicate algorithm key: {info.key}")
            self._entries[info.key] = info

    def list(self) -> List[AlgoInfo]:
        return list(self._entries.values())

    def keys(self) -> List[str]:
        return list(self._entries)

    def get(self, key: str) -> Optional[AlgoInfo]:
        """Return AlgoInfo by key, or None."""
        return self._entries.get(key)

    def default(self) -> AlgoInfo:
        return next(iter(self._entries.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[AlgoInfo]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# THE CATALOGS
# ---------------------------------------------------------------------------
SORTING = Catalog([
    AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent pairs; stops after a pass with no swap.",
    ),
    AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        tags=["comparison", "divide-and-conquer", "recursive"],
        complexity_time="O(n log n)", complexity_space="O(log n)",
        description="Middle-element pivot, two-pointer partition, recurse on both halves.",
    ),
    AlgoInfo(
        key="shell", label="Shell Sort", fn=_shell, pseudocode=_shell_pc,
        tags=["comparison", "gap-sequence", "in-place"],
        complexity_time="O(n^1.5)", complexity_space="O(1)",
        description="Insertion sort over shrinking gaps (1, 4, 13, …).",
    ),
    AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insert, pseudocode=_insert_pc,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps each new element left until it is in place.",
    ),
])

SEARCH = Catalog([
    AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores ring by ring. Finds the shortest path by hop count.",
    ),
    AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
    ),
    AlgoInfo(
        key="bidirectional_bfs", label="Bidirectional BFS", fn=_bibfs, pseudocode=_bibfs_pc,
        tags=["unweighted", "shortest-path", "bidirectional"],
        complexity_time="O(b^(d/2))", complexity_space="O(b^(d/2))",
        description="Two frontiers from start & end meet in the middle.",
    ),
])

DYNAMIC_PROGRAMMING = Catalog([
    AlgoInfo(
        key="knapsack", label="0/1 Knapsack", fn=_knap, pseudocode=_knap_pc,
        tags=["dynamic-programming", "optimisation"],
        complexity_time="O(n · W)", complexity_space="O(n · W)",
        description="Bottom-up table of best values per item prefix and capacity.",
    ),
])


# ---------------------------------------------------------------------------
# Domain — a catalog plus everything the controller needs to run it
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Domain:
    key:              str
    label:            str
    catalog:          Catalog
    new_state:        Callable[[], Any]      # fresh initial working structure
    new_stats:        Callable[[], Any]      # zeroed stats record
    clone:            Callable[[Any], Any]   # independent copy of a working structure
    prepare:          Callable[[Any], Any]   # copy handed to a fresh generator
    serialize:        Callable[[Any], Any]   # JSON-ready view of a working structure
    default_speed_ms: int = 500


def _grid_to_json(grid: Grid) -> List[List[str]]:
    return [[cell.value for cell in row] for row in grid]


def _clone_board(board: KnapsackBoard) -> KnapsackBoard:
    return board.clone()


def _board_to_json(board: KnapsackBoard) -> Dict[str, Any]:
    return board.to_dict()


DOMAINS: Dict[str, Domain] = {
    "sort": Domain(
        key="sort", label="Sorting", catalog=SORTING,
        new_state=random_array, new_stats=SortStats, clone=clone_array,
        prepare=clone_array, serialize=clone_array,
        default_speed_ms=500,
    ),
    "search": Domain(
        key="search", label="Path Search", catalog=SEARCH,
        new_state=new_grid, new_stats=SearchStats, clone=clone_grid,
        prepare=clear_search, serialize=_grid_to_json,
        default_speed_ms=100,
    ),
    "knapsack": Domain(
        key="knapsack", label="Dynamic Programming", catalog=DYNAMIC_PROGRAMMING,
        new_state=new_board, new_stats=KnapsackStats, clone=_clone_board,
        prepare=_clone_board, serialize=_board_to_json,
        default_speed_ms=500,
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_domain(key: str) -> Optional[Domain]:
    """Return Domain by key, or None."""
    return DOMAINS.get(key)


def list_domains() -> List[Domain]:
    return list(DOMAINS.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter every catalog by tag."""
    return [a for d in DOMAINS.values() for a in d.catalog if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "Catalog",
    "Domain",
    "Step",
    "SORTING",
    "SEARCH",
    "DYNAMIC_PROGRAMMING",
    "DOMAINS",
    "get_domain",
    "list_domains",
    "algorithms_by_tag",
]
