"""
shell_sort.py — Shell Sort
==========================
Knuth gap sequence (1, 4, 13, 40, …): grow with gap*3+1 while the gap is
below n/3, then divide by three after every pass.  Each pass runs the
exchange-based insertion sort over the gap-strided subsequences.

Yields on: starting an element, each comparison, each swap.
`stats.current_gap` shows the gap of the pass in progress.
"""

from typing import Generator, List

from algorithms.step import Step, array_step
from algorithms.stats import SortStats


PSEUDOCODE: List[str] = [
    "def ShellSort(a):",                             # 0
    "    gap ← 1",                                   # 1
    "    while gap < n / 3: gap ← gap*3 + 1",        # 2
    "    while gap > 0:",                            # 3
    "        for i in gap .. n-1:",                  # 4
    "            j ← i",                             # 5
    "            while j >= gap:",                   # 6
    "                if a[j-gap] <= a[j]: break",    # 7
    "                swap(a[j-gap], a[j])",          # 8
    "                j ← j - gap",                   # 9
    "        gap ← gap / 3",                         # 10
]


def shell_sort(values: List[int], stats: SortStats) -> Generator[Step, None, None]:
    array = list(values)
    n = len(array)

    gap = 1
    while gap < n / 3:
        gap = gap * 3 + 1

    while gap > 0:
        stats.current_gap = gap
        for i in range(gap, n):
            yield array_step(array, (i,), f"Gap {gap}: start element {array[i]}")

            j = i
            while j >= gap:
                k = j - gap
                stats.comparisons += 1
                yield array_step(array, (j, k), f"Compare {array[k]} and {array[j]}")

                if array[k] <= array[j]:
                    break

                array[j], array[k] = array[k], array[j]
                stats.swaps += 1
                yield array_step(array, (k, j), f"Swap {array[j]} and {array[k]}")
                j -= gap
        gap //= 3

    yield array_step(array, (), "Sorted", is_final=True)
