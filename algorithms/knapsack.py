"""
knapsack.py — 0/1 Knapsack (bottom-up DP)
==========================================
Fills dp[i][j] = best value using items 1..i within capacity j, row by
row.  For every cell the Step shows:

  • the cell itself            →  "active"
  • dp[i-1][j]   (skip item)   →  "visited"
  • dp[i-1][j-w] (take item)   →  "visited"   (only when the item fits)

The tags are reverted to "default" once the cell is done, so each frame
highlights exactly one computation.  Whenever a cell beats the best value
seen so far an extra Step announces the new maximum.

Stats:
  • max_value           – best value found so far
  • remaining_capacity  – capacity - j at the cell that set max_value
"""

from typing import Generator, List, Tuple

from algorithms.step import Step, matrix_step
from algorithms.stats import KnapsackStats
from board.knapsack import Cell, KnapsackBoard


PSEUDOCODE: List[str] = [
    "def Knapsack(items, W):",                              # 0
    "    dp[0][*] ← 0;  dp[*][0] ← 0",                      # 1
    "    for i in 1 .. n:",                                 # 2
    "        for j in 1 .. W:",                             # 3
    "            skip ← dp[i-1][j]",                        # 4
    "            if w[i] > j: dp[i][j] ← skip",             # 5
    "            else:",                                    # 6
    "                take ← dp[i-1][j-w[i]] + v[i]",        # 7
    "                dp[i][j] ← max(skip, take)",           # 8
    "    return dp[n][W]",                                  # 9
]


def knapsack(board: KnapsackBoard, stats: KnapsackStats) -> Generator[Step, None, None]:
    work  = board.clone()
    items = work.items
    W     = work.capacity
    work.matrix = [[Cell() for _ in range(W + 1)] for _ in range(len(items) + 1)]
    dp = work.matrix

    for i in range(1, len(items) + 1):
        item = items[i - 1]
        for j in range(1, W + 1):
            skip = dp[i - 1][j].value
            predecessors: List[Tuple[int, int]] = [(i - 1, j)]

            if item.weight > j:
                dp[i][j].value = skip
            else:
                take = dp[i - 1][j - item.weight].value + item.value
                item.selected = take > skip
                dp[i][j].value = max(skip, take)
                predecessors.append((i - 1, j - item.weight))

            dp[i][j].state = "active"
            for pi, pj in predecessors:
                dp[pi][pj].state = "visited"
            yield matrix_step(
                work,
                f"Item {i} (weight {item.weight}, value {item.value}), "
                f"capacity {j}: best value {dp[i][j].value}",
            )

            if dp[i][j].value > stats.max_value:
                stats.max_value = dp[i][j].value
                stats.remaining_capacity = W - j
                yield matrix_step(
                    work,
                    f"New maximum {stats.max_value}, remaining capacity {stats.remaining_capacity}",
                )

            for pi, pj in predecessors:
                dp[pi][pj].state = "default"
            dp[i][j].state = "default"

    yield matrix_step(work, f"Optimal value: {dp[len(items)][W].value}", is_final=True)
