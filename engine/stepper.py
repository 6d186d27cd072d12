"""
stepper.py — Step-by-Step Trace Navigation
===========================================
The Stepper replays a recorded trace WITHOUT timers: one event per
step (a swap takes two), every resulting frame buffered so the user can go back as well
as forward.  It drives the Next / Prev / Rewind / Jump-to-end buttons;
timed playback belongs to PlaybackController.

Frames:
    frames[0]      – the input, nothing highlighted
    frames[k]      – the display after the next event; a swap takes two
                     frames: highlighted over the old contents
                     (swap_pending), then applied
    frames[-1]     – the sorted result, highlights cleared (is_final)

State machine:
    IDLE  →  start()   →  PAUSED
    PAUSED  →  play()    →  PLAYING
    PLAYING →  pause()   →  PAUSED
    any     →  (last frame reached) → FINISHED
    any     →  reset()   →  IDLE
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from algorithms.event import Event, EventKind
from engine.cursor import CursorView, PlaybackCursor
from engine.player import SPEED_PRESETS, speed_to_delay_ms


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class Frame:
    index:     int                  # 0-based frame number
    view:      CursorView
    event:     Optional[Event] = None
    is_final:  bool            = False
    swap_pending: bool         = False  # swap highlighted, not yet applied

    def to_dict(self) -> dict:
        data = self.view.to_dict()
        data.update({
            "frame":    self.index,
            "event":    self.event.to_dict() if self.event else None,
            "is_final": self.is_final,
            "swap_pending": self.swap_pending,
        })
        return data


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        frames      : Frames built so far (buffer for rewind).
        current_idx : Index into `frames` currently displayed.
        speed       : 1..100 slider value.
        on_step     : Optional callback(Frame) fired every time the current
                      frame changes.  The UI hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[Frame], None]] = None):
        self._trace:      Sequence[Event]        = ()
        self._cursor:     Optional[PlaybackCursor] = None
        self._final_done: bool                   = False
        self._swaps:      int                    = 0
        self.frames:      List[Frame]            = []
        self.current_idx: int                    = -1
        self.state:       StepperState           = StepperState.IDLE
        self.speed:       int                    = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Frame], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, trace: Sequence[Event], initial: Iterable[int] = ()) -> None:
        """Attach a trace and show the initial frame."""
        self._trace      = tuple(trace)
        self._cursor     = PlaybackCursor(initial)
        self._swaps      = sum(
            1 for e in self._trace if e.kind is EventKind.SWAP and e.snapshot is not None
        )
        self._final_done = False
        self.frames      = [Frame(index=0, view=self._cursor.view())]
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._trace      = ()
        self._cursor     = None
        self.frames      = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one frame.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.frames):
            if not self._fetch_next():
                self.state = StepperState.FINISHED
                return False
        self._goto(target)
        if self.current_frame and self.current_frame.is_final:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one frame.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary frame index, building frames as needed."""
        while idx >= len(self.frames):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.frames):
            self._goto(idx)
            last = self.frames[idx].is_final
            self.state = StepperState.FINISHED if last else StepperState.PAUSED
            return True
        return False

    def rewind(self) -> None:
        """Jump back to frame 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        """Build every remaining frame and show the last one."""
        while self._fetch_next():
            pass
        if self.frames:
            self._goto(len(self.frames) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause (flags only; the caller owns the timer)
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state = StepperState.PLAYING

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, speed: int) -> None:
        self.speed = max(1, min(100, int(speed)))

    @property
    def delay_ms(self) -> int:
        return speed_to_delay_ms(self.speed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_frame(self) -> Optional[Frame]:
        if 0 <= self.current_idx < len(self.frames):
            return self.frames[self.current_idx]
        return None

    @property
    def total_frames(self) -> int:
        """Frames in a fully built run: initial + one per event + one more per swap + final."""
        return len(self._trace) + self._swaps + 2 if self._cursor else 0

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Build one more frame.  Returns False once the final frame exists."""
        if self._cursor is None or self._final_done:
            return False

        if self._cursor.swap_pending:
            self._cursor.commit_swap()
            event = self.frames[-1].event
            self.frames.append(Frame(index=len(self.frames), view=self._cursor.view(), event=event))
            return True

        consumed = self._cursor.position
        if consumed < len(self._trace):
            event = self._trace[consumed]
            self._cursor.apply(event)
            self.frames.append(Frame(
                index=len(self.frames),
                view=self._cursor.view(),
                event=event,
                swap_pending=self._cursor.swap_pending,
            ))
        else:
            self._cursor.clear_highlights()
            self.frames.append(Frame(index=len(self.frames), view=self._cursor.view(), is_final=True))
            self._final_done = True
        return True

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.frames[idx] if 0 <= idx < len(self.frames) else None)

    def _notify(self, frame: Optional[Frame]) -> None:
        if self.on_step and frame is not None:
            self.on_step(frame)
