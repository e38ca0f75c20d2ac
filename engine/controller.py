"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY object a UI talks to during a run.
It owns the generator, the stats record and the observed working state,
and exposes a select/start/step/reset/speed API.

State machine:
    IDLE      →  start()               →  RUNNING
    RUNNING   →  final step / exhausted →  FINISHED
    RUNNING   →  cancel() / cleanup()   →  IDLE
    any       →  reset()               →  IDLE   (fresh working state)

Auto mode pulls one step per timer callback: the first pull is scheduled
immediately, each following pull `speed` ms after the previous one was
applied.  Manual mode never schedules; the caller pulls with step().

Invariants:
  - At most ONE timer is pending.  Every transition that stops a run
    cancels it, and each callback also checks the run token it was
    scheduled under, so a callback from an old run can never pull.
  - Pulls are strictly sequential: the next pull is only scheduled after
    the previous step has been applied and observers notified.
  - The observed state is always a private copy of the last Step's
    snapshot; callers mutating a Step cannot reach it.

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread (the one
  that owns the scheduler).
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from algorithms import AlgoInfo, Domain
from algorithms.step import Step
from engine.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds between steps)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   100,    # demo mode
    "turbo":  20,
}

MIN_SPEED_MS = 10


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        domain         : The Domain whose catalog / boards this controller runs.
        selected       : AlgoInfo that start() will run (None = nothing selected).
        state          : Observed working structure (mirrors the last Step).
        stats          : Stats record of the current / last run.
        description    : Narration of the last applied Step.
        highlight      : Highlight indices of the last applied Step.
        current_step   : Number of Steps applied in this run.
        speed          : Milliseconds between auto-mode pulls.
        is_manual_mode : True → pulls only happen through step().
        on_step        : Optional callback(Step) fired after every applied Step.
                         The UI hooks its re-render here.
    """

    def __init__(
        self,
        domain: Domain,
        scheduler: Scheduler,
        on_step: Optional[Callable[[Step], None]] = None,
        state_factory: Optional[Callable[[], Any]] = None,
    ):
        self.domain    = domain
        self.scheduler = scheduler
        self.on_step   = on_step

        self._state_factory = state_factory or domain.new_state
        self._generator: Optional[Any]          = None
        self._timer:     Optional[TimerHandle]  = None
        self._run_token: int                    = 0

        self.selected:       Optional[AlgoInfo] = domain.catalog.default()
        self.playback:       PlaybackState      = PlaybackState.IDLE
        self.is_manual_mode: bool               = False
        self.speed:          int                = domain.default_speed_ms
        self.current_step:   int                = 0
        self.state:          Any                = self._state_factory()
        self.stats:          Any                = domain.new_stats()
        self.description:    str                = ""
        self.highlight:      Tuple[int, ...]    = ()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select(self, key: str) -> bool:
        """Pick the algorithm for the next run.  Unknown keys are ignored."""
        if self.is_running:
            return False
        info = self.domain.catalog.get(key)
        if info is None:
            logger.warning("Unknown %s algorithm %r ignored", self.domain.key, key)
            return False
        self.selected = info
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin a run on a copy of the current working state."""
        if self.is_running:
            return False
        if self.selected is None:
            logger.warning("start() with no %s algorithm selected", self.domain.key)
            return False

        self._cancel_timer()
        self._run_token += 1
        self.stats        = self.domain.new_stats()
        self.current_step = 0
        self.highlight    = ()
        self.state        = self.domain.prepare(self.state)
        self._generator   = self.selected.fn(self.domain.clone(self.state), self.stats)
        self.playback     = PlaybackState.RUNNING
        logger.info(
            "Started %s/%s (%s mode, %d ms)",
            self.domain.key, self.selected.key,
            "manual" if self.is_manual_mode else "auto", self.speed,
        )

        if not self.is_manual_mode:
            self._schedule(0)
        return True

    def step(self) -> bool:
        """Manual mode only: pull and apply exactly one Step."""
        if not self.is_running or not self.is_manual_mode:
            return False
        return self._pull() is not None

    def reset(self) -> None:
        """Stop, then start over from a fresh initial working state."""
        self._stop()
        self.playback     = PlaybackState.IDLE
        self.state        = self._state_factory()
        self.stats        = self.domain.new_stats()
        self.current_step = 0
        self.description  = ""
        self.highlight    = ()
        logger.debug("Reset %s controller", self.domain.key)

    def cancel(self) -> None:
        """Stop the run, keeping whatever state was last observed."""
        if self.is_running:
            logger.info("Cancelled %s run after %d steps", self.domain.key, self.current_step)
            self.playback = PlaybackState.IDLE
        self._stop()

    def cleanup(self) -> None:
        """Teardown hook for hosts: nothing scheduled survives this call."""
        self.cancel()

    def load(self, state: Any) -> bool:
        """Replace the working state (e.g. a user-edited grid) while idle."""
        if self.is_running:
            return False
        self.state        = self.domain.clone(state)
        self.current_step = 0
        self.description  = ""
        self.highlight    = ()
        self.playback     = PlaybackState.IDLE
        return True

    # ------------------------------------------------------------------
    # Speed / mode
    # ------------------------------------------------------------------
    def set_speed(self, speed: Union[int, float, str]) -> int:
        """Milliseconds or a SPEED_PRESETS name.  Applies from the next scheduled pull."""
        if isinstance(speed, str):
            speed = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.speed = max(MIN_SPEED_MS, int(speed))
        return self.speed

    def set_manual_mode(self, manual: bool) -> None:
        """
        Switching to manual mid-run pauses auto playback; switching back
        resumes it after one `speed` interval.
        """
        manual = bool(manual)
        if manual == self.is_manual_mode:
            return
        self.is_manual_mode = manual
        if not self.is_running:
            return
        if manual:
            self._cancel_timer()
        else:
            self._schedule(self.speed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.playback == PlaybackState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.playback == PlaybackState.FINISHED

    @property
    def has_pending_pull(self) -> bool:
        return self._timer is not None and not self._timer.cancelled

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of everything a renderer needs."""
        return {
            "domain":         self.domain.key,
            "algorithm":      self.selected.key if self.selected else None,
            "playback":       self.playback.value,
            "is_running":     self.is_running,
            "is_manual_mode": self.is_manual_mode,
            "speed":          self.speed,
            "current_step":   self.current_step,
            "description":    self.description,
            "highlight":      list(self.highlight),
            "stats":          self.stats.as_dict(),
            "state":          self.domain.serialize(self.state),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self, delay_ms: int) -> None:
        self._cancel_timer()
        token = self._run_token
        self._timer = self.scheduler.schedule_after(delay_ms, lambda: self._tick(token))

    def _tick(self, token: int) -> None:
        self._timer = None
        if token != self._run_token or not self.is_running or self.is_manual_mode:
            return
        if self._pull() is not None and self.is_running and not self.is_manual_mode:
            self._schedule(self.speed)

    def _pull(self) -> Optional[Step]:
        """Pull one Step from the generator and apply it."""
        if self._generator is None:
            return None
        try:
            step = next(self._generator)
        except StopIteration:
            self._finish()
            return None

        self.state        = self.domain.clone(step.snapshot)
        self.description  = step.description or self.description
        self.highlight    = tuple(step.highlight)
        self.current_step += 1
        if self.on_step is not None:
            self.on_step(step)
        if step.is_final and self.is_running:
            self._finish()
        return step

    def _finish(self) -> None:
        self.playback  = PlaybackState.FINISHED
        self.highlight = ()
        self._stop()
        logger.info(
            "Finished %s/%s in %d steps",
            self.domain.key, self.selected.key if self.selected else "?", self.current_step,
        )

    def _stop(self) -> None:
        self._cancel_timer()
        self._run_token += 1
        if self._generator is not None:
            self._generator.close()
            self._generator = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None
