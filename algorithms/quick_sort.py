"""
quick_sort.py — Quick Sort
==========================
Recursive quick sort written as nested generators (`yield from`), so
the recursion suspends at every yield just like the flat algorithms.

Pivot: the MIDDLE element, parked at `high` before partitioning.
Partition: two-pointer (Hoare-style) scan — `i` walks right past values
below the pivot, `j` walks left past values above it, out-of-place pairs
are swapped, and the pivot is finally dropped into slot `i`.

Yields on: pivot selection, each successful comparison of either scan,
each swap, and pivot placement.

Stats:
  • pivot_index      – index of the pivot being worked on
  • recursion_depth  – number of quick(low, high) calls made so far
"""

from typing import Generator, List

from algorithms.step import Step, array_step
from algorithms.stats import SortStats


PSEUDOCODE: List[str] = [
    "def QuickSort(a, low, high):",                  # 0
    "    if low < high:",                            # 1
    "        p ← Partition(a, low, high)",           # 2
    "        QuickSort(a, low, p - 1)",              # 3
    "        QuickSort(a, p + 1, high)",             # 4
    "def Partition(a, low, high):",                  # 5
    "    mid ← (low + high) / 2; swap(a[mid], a[high])",  # 6
    "    i ← low - 1;  j ← high",                    # 7
    "    loop:",                                     # 8
    "        do i ← i + 1 while a[i] < pivot",       # 9
    "        do j ← j - 1 while j > low and a[j] > pivot",  # 10
    "        if i >= j: break",                      # 11
    "        swap(a[i], a[j])",                      # 12
    "    swap(a[i], a[high]);  return i",            # 13
]


def quick_sort(values: List[int], stats: SortStats) -> Generator[Step, None, None]:
    array = list(values)

    def quick(low: int, high: int) -> Generator[Step, None, None]:
        stats.recursion_depth += 1
        if low < high:
            mid = (low + high) // 2
            stats.pivot_index = mid
            yield array_step(array, (mid,), f"Pick pivot {array[mid]} at index {mid}")

            p = yield from partition(low, high)
            stats.pivot_index = p
            yield from quick(low, p - 1)
            yield from quick(p + 1, high)

    def partition(low: int, high: int) -> Generator[Step, None, int]:
        mid = (low + high) // 2
        pivot = array[mid]
        stats.pivot_index = mid

        if mid != high:
            array[mid], array[high] = array[high], array[mid]
            stats.swaps += 1
            yield array_step(array, (mid, high), f"Move pivot {pivot} to the end")

        i, j = low - 1, high
        while True:
            # a[high] == pivot stops this scan
            while True:
                i += 1
                if not array[i] < pivot:
                    break
                stats.comparisons += 1
                yield array_step(array, (i, high), f"Compare {array[i]} with pivot {pivot}")

            while j > low:
                j -= 1
                if not array[j] > pivot:
                    break
                stats.comparisons += 1
                yield array_step(array, (j, high), f"Compare {array[j]} with pivot {pivot}")

            if i >= j:
                break

            array[i], array[j] = array[j], array[i]
            stats.swaps += 1
            yield array_step(array, (i, j, high), f"Swap {array[i]} and {array[j]}")

        if i != high:
            array[i], array[high] = array[high], array[i]
            stats.swaps += 1
            yield array_step(array, (i, high), f"Place pivot {array[i]} at index {i}")
        return i

    yield from quick(0, len(array) - 1)
    yield array_step(array, (), "Sorted", is_final=True)
