"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the summary
metrics the analytics panel shows.

Usage:
    rec = Recorder(get_domain("sort"))
    rec.start("quick", initial_state=[5, 3, 1, 4, 2])
    metrics = rec.run_to_completion()   # drains the generator
    rec.export()                        # serialisable snapshot for save/replay

The recorder drives an ordinary PlaybackController in manual mode, so a
recorded run goes through exactly the same pull/apply path as a live one.
"""

import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, Domain
from algorithms.step import Step
from engine.controller import PlaybackController
from engine.scheduler import VirtualScheduler


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    domain:        str            = ""
    algo_key:      str            = ""
    algo_label:    str            = ""
    total_steps:   int            = 0       # number of Steps yielded
    stats:         Dict[str, Any] = field(default_factory=dict)
    description:   str            = ""      # narration of the final step
    wall_time_ms:  float          = 0.0     # wall-clock time to run to completion
    memory_bytes:  int            = 0       # approx size of the step buffer


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps      : Full list of Steps from the run.
        metrics    : Computed RunMetrics (available after run_to_completion).
        controller : The underlying PlaybackController.
    """

    def __init__(self, domain: Domain):
        self.domain = domain
        self.steps:      List[Step]                   = []
        self.metrics:    Optional[RunMetrics]         = None
        self.controller: Optional[PlaybackController] = None

        self._algo_info:     Optional[AlgoInfo] = None
        self._initial_state: Any                = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, initial_state: Any = None) -> None:
        """Prepare a run of `algo_key` on `initial_state` (fresh random state if None)."""
        info = self.domain.catalog.get(algo_key)
        if info is None:
            raise ValueError(f"Unknown {self.domain.key} algorithm: {algo_key}")

        self._algo_info = info
        self.steps      = []
        self.metrics    = None

        self.controller = PlaybackController(
            self.domain, VirtualScheduler(), on_step=self.record_step,
        )
        if initial_state is not None:
            self.controller.load(initial_state)
        self._initial_state = self.domain.clone(self.controller.state)
        self.controller.select(info.key)
        self.controller.set_manual_mode(True)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self.controller is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.controller.start()
        while self.controller.step():
            pass
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def run(self, algo_key: str, initial_state: Any = None) -> RunMetrics:
        self.start(algo_key, initial_state)
        return self.run_to_completion()

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Step access (for live playback recording)
    # ------------------------------------------------------------------
    def record_step(self, step: Step) -> None:
        self.steps.append(step)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.metrics is None:
            raise RuntimeError("Nothing recorded yet; call run_to_completion() first.")
        serialize = self.domain.serialize
        return {
            "domain":   self.domain.key,
            "algo_key": self._algo_info.key if self._algo_info else "",
            "initial":  serialize(self._initial_state),
            "metrics":  asdict(self.metrics),
            "steps": [
                {
                    "state":       serialize(s.snapshot),
                    "description": s.description,
                    "highlight":   list(s.highlight),
                    "is_final":    s.is_final,
                }
                for s in self.steps
            ],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s) + sys.getsizeof(s.snapshot)

        return RunMetrics(
            domain=self.domain.key,
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            total_steps=len(self.steps),
            stats=self.controller.stats.as_dict() if self.controller else {},
            description=last.description if last else "",
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )
