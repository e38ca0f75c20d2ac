"""
insertion_sort.py — Insertion Sort
==================================
Exchange-based insertion sort: the new element is swapped leftwards one
slot at a time rather than shifted into a hole, so every intermediate
array is a permutation of the input.
"""

from typing import Generator, List

from algorithms.step import Step, array_step
from algorithms.stats import SortStats


PSEUDOCODE: List[str] = [
    "def InsertionSort(a):",                         # 0
    "    for i in 1 .. n-1:",                        # 1
    "        j ← i",                                 # 2
    "        while j > 0:",                          # 3
    "            if a[j-1] <= a[j]: break",          # 4
    "            swap(a[j-1], a[j])",                # 5
    "            j ← j - 1",                         # 6
]


def insertion_sort(values: List[int], stats: SortStats) -> Generator[Step, None, None]:
    array = list(values)

    for i in range(1, len(array)):
        yield array_step(array, (i,), f"Start inserting {array[i]}")

        j = i
        while j > 0:
            stats.comparisons += 1
            yield array_step(array, (j, j - 1), f"Compare {array[j - 1]} and {array[j]}")

            if array[j - 1] <= array[j]:
                break

            array[j], array[j - 1] = array[j - 1], array[j]
            stats.swaps += 1
            yield array_step(array, (j - 1,), f"Swap {array[j - 1]} and {array[j]}")
            j -= 1

    yield array_step(array, (), "Sorted", is_final=True)
