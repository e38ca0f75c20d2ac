"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, VirtualScheduler, Recorder
"""

from engine.scheduler  import (
    Scheduler, TimerHandle, VirtualScheduler, PolledScheduler, AsyncioScheduler,
)
from engine.controller import PlaybackController, PlaybackState, SPEED_PRESETS, MIN_SPEED_MS
from engine.recorder   import Recorder, RunMetrics

__all__ = [
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
    "PolledScheduler",
    "AsyncioScheduler",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "MIN_SPEED_MS",
    "Recorder",
    "RunMetrics",
]
