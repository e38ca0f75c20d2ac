"""
stats.py — Run Statistics
=========================
Mutable counters handed to a generator by reference.  The generator
accumulates into them while it runs; the controller replaces the whole
record with a fresh one at the start of every run.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class SortStats:
    comparisons:     int = 0
    swaps:           int = 0
    pivot_index:     int = -1     # quick sort only; -1 = no pivot yet
    recursion_depth: int = 0
    current_gap:     int = 0      # shell sort only

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchStats:
    visited_nodes: int = 0
    path_length:   int = 0        # edges on the final path
    max_frontier:  int = 0        # largest queue / stack size seen

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class KnapsackStats:
    max_value:          int = 0
    remaining_capacity: int = 0   # capacity left when max_value was first reached

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
