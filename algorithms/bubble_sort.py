"""
bubble_sort.py — Bubble Sort
============================
Adjacent-swap bubble sort with early exit.  Yields a Step:
  1. Before every comparison  →  both indices highlighted
  2. After every swap         →  both indices highlighted
  3. Final step               →  sorted array, no highlight

A pass that performs no swap ends the sort.
"""

from typing import Generator, List

from algorithms.step import Step, array_step
from algorithms.stats import SortStats


PSEUDOCODE: List[str] = [
    "def BubbleSort(a):",                            # 0
    "    swapped ← true",                            # 1
    "    for i in 0 .. n-1 while swapped:",          # 2
    "        swapped ← false",                       # 3
    "        for j in 0 .. n-i-2:",                  # 4
    "            if a[j] > a[j+1]:",                 # 5
    "                swap(a[j], a[j+1])",            # 6
    "                swapped ← true",                # 7
]


def bubble_sort(values: List[int], stats: SortStats) -> Generator[Step, None, None]:
    array = list(values)
    n = len(array)
    stats.recursion_depth = 0
    swapped = True

    i = 0
    while i < n and swapped:
        swapped = False
        for j in range(n - i - 1):
            stats.comparisons += 1
            yield array_step(array, (j, j + 1), f"Compare {array[j]} and {array[j + 1]}")

            if array[j] > array[j + 1]:
                array[j], array[j + 1] = array[j + 1], array[j]
                stats.swaps += 1
                swapped = True
                yield array_step(array, (j, j + 1), f"Swap {array[j + 1]} and {array[j]}")
        i += 1

    yield array_step(array, (), "Sorted", is_final=True)
