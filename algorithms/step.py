"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The whole working structure (array / grid / knapsack table)
    • Which elements the step is about (sorting highlights indices;
      grids and tables carry their emphasis in the cell tags)
    • A plain-English narration of what just happened

Design decisions:
  - Step is a plain frozen dataclass.  It is a SNAPSHOT: the builders
    below copy the algorithm's working buffer, so a Step never aliases
    anything the generator will touch again.
  - The algorithm generator is the only writer of its working buffer;
    the controller / renderer are pure readers of Steps.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from board.grid     import Grid, clone_grid
from board.knapsack import KnapsackBoard


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        snapshot    : Independent copy of the working structure —
                        • List[int]            for sorting
                        • Grid                 for pathfinding
                        • KnapsackBoard        for dynamic programming
        description : Human-readable "what just happened" text.
        highlight   : Indices the step concerns (sorting only).
        is_final    : True on the very last step of a run.
    """

    snapshot:    Any
    description: str             = ""
    highlight:   Tuple[int, ...] = ()
    is_final:    bool            = False


# ---------------------------------------------------------------------------
# Builders: one per domain, each takes its own copy
# ---------------------------------------------------------------------------
def array_step(
    array: List[int],
    active: Iterable[int] = (),
    description: str = "",
    is_final: bool = False,
) -> Step:
    return Step(snapshot=list(array), description=description,
                highlight=tuple(active), is_final=is_final)


def grid_step(grid: Grid, description: str = "", is_final: bool = False) -> Step:
    return Step(snapshot=clone_grid(grid), description=description, is_final=is_final)


def matrix_step(board: KnapsackBoard, description: str = "", is_final: bool = False) -> Step:
    return Step(snapshot=board.clone(), description=description, is_final=is_final)
