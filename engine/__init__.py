"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Stepper, Recorder, compare
"""

from engine.cursor   import PlaybackCursor, CursorView, SwapPhase
from engine.player   import (
    PlaybackController,
    PlaybackState,
    PlaybackOutcome,
    ConcurrentPlaybackRejected,
    SPEED_PRESETS,
    speed_to_delay_ms,
)
from engine.stepper  import Stepper, StepperState, Frame
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "PlaybackCursor",
    "CursorView",
    "SwapPhase",
    "PlaybackController",
    "PlaybackState",
    "PlaybackOutcome",
    "ConcurrentPlaybackRejected",
    "SPEED_PRESETS",
    "speed_to_delay_ms",
    "Stepper",
    "StepperState",
    "Frame",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
