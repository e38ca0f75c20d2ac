"""
knapsack.py — 0/1 Knapsack Board
================================
The DP domain's working structure: the item set, the capacity, and the
(n+1) x (capacity+1) table the algorithm fills in.

    board = new_board(items=[Item(0, 2, 3), Item(1, 3, 4)], capacity=5)
    board.matrix[i][j].value   # best value using items 1..i with capacity j
    board.matrix[i][j].state   # "default" | "active" | "visited"
"""

import random
from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass
class Item:
    id:       int
    weight:   int
    value:    int
    selected: bool = False    # last take/skip decision made for this item


@dataclass
class Cell:
    value: int = 0
    state: str = "default"


@dataclass
class KnapsackBoard:
    items:    List[Item]         = field(default_factory=list)
    capacity: int                = 0
    matrix:   List[List[Cell]]   = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.matrix)

    @property
    def cols(self) -> int:
        return len(self.matrix[0]) if self.matrix else 0

    @property
    def optimal_value(self) -> int:
        return self.matrix[len(self.items)][self.capacity].value

    def clone(self) -> "KnapsackBoard":
        return KnapsackBoard(
            items=[replace(item) for item in self.items],
            capacity=self.capacity,
            matrix=[[replace(cell) for cell in row] for row in self.matrix],
        )

    def to_dict(self) -> dict:
        return {
            "capacity": self.capacity,
            "items": [
                {"id": it.id, "weight": it.weight, "value": it.value, "selected": it.selected}
                for it in self.items
            ],
            "matrix": [[{"value": c.value, "state": c.state} for c in row] for row in self.matrix],
        }


def random_items(count: int = 5, rng: Optional[random.Random] = None) -> List[Item]:
    """Weights 1..10, values 1..5 — small enough to read in the table."""
    rng = rng or random
    return [Item(id=i, weight=rng.randint(1, 10), value=rng.randint(1, 5)) for i in range(count)]


def new_board(items: Optional[List[Item]] = None, capacity: int = 15) -> KnapsackBoard:
    """Zero-filled table sized for `items` (random when omitted) and `capacity`."""
    if items is None:
        items = random_items()
    matrix = [[Cell() for _ in range(capacity + 1)] for _ in range(len(items) + 1)]
    return KnapsackBoard(items=list(items), capacity=capacity, matrix=matrix)
