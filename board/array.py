"""
array.py — Sorting Input
========================
The sorting domain works on a plain list of ints.  Bars are drawn with
their height proportional to the value, so the default range keeps every
bar visible (nothing below 11).
"""

import random
from typing import List, Optional


def random_array(
    length: int = 6,
    low: int = 11,
    high: int = 50,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Fresh random input, values drawn uniformly from [low, high]."""
    rng = rng or random
    return [rng.randint(low, high) for _ in range(length)]


def clone_array(values: List[int]) -> List[int]:
    return list(values)
