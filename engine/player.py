"""
player.py — Timed Trace Playback
=================================
The PlaybackController turns a finished trace into a paced series of
visual states.  It is the ONLY writer of the displayed state while a
playback is active.

State machine:
    IDLE / FINISHED / CANCELLED  →  play()          →  PLAYING
    PLAYING                      →  (trace consumed) →  FINISHED
    PLAYING                      →  cancel()        →  CANCELLED

Timing, per event:
    wait delay (× compare_factor for compare events), apply the event
    swap  → highlight now, move the bars `swap_fraction × delay` later

Scheduling:
  Nothing here sleeps.  Every wait is a timer on a scheduler, i.e. any
  object with `call_later(seconds, callback, *args)` returning a handle
  with `cancel()`.  An asyncio event loop is exactly that and is the
  default (the running loop at play() time).  The controller owns at
  most two handles at once (next event, pending swap commit) and every
  callback carries the generation it was scheduled under: cancel()
  cancels both handles and bumps the generation, so a callback that
  slipped through still finds itself stale and does nothing.

Thread safety:
  Not thread-safe.  Call it from the thread that runs the scheduler.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence

from algorithms.event import Event, EventKind
from engine.cursor import CursorView, PlaybackCursor

logger = logging.getLogger(__name__)


class ConcurrentPlaybackRejected(RuntimeError):
    """Raised when a playback (or run) is started while one is active."""


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


class PlaybackOutcome(Enum):
    FINISHED  = "finished"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Speed (1..100 slider value → milliseconds per event)
# ---------------------------------------------------------------------------
MIN_SPEED = 1
MAX_SPEED = 100

SPEED_PRESETS = {
    "slow":   10,     # teaching mode
    "medium": 50,
    "fast":   80,
    "turbo":  100,
}


def speed_to_delay_ms(speed: int) -> int:
    """Higher speed, shorter delay.  Never below 100 ms."""
    speed = max(MIN_SPEED, min(MAX_SPEED, int(speed)))
    return 1000 - speed * 9


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state          : Current PlaybackState.
        swap_fraction  : Share of the delay a swap stays highlighted before
                         its snapshot is applied.
        compare_factor : Multiplier on the wait before a compare event.
        last_view      : The last CursorView handed to on_state (kept after
                         the playback ends).
    """

    def __init__(
        self,
        scheduler: Optional[Any] = None,
        swap_fraction: float = 0.4,
        compare_factor: float = 1.0,
    ):
        if not 0 < swap_fraction < 1:
            raise ValueError(f"swap_fraction must be in (0, 1), got {swap_fraction}")
        if compare_factor <= 0:
            raise ValueError(f"compare_factor must be positive, got {compare_factor}")

        self.state:          PlaybackState = PlaybackState.IDLE
        self.swap_fraction:  float         = swap_fraction
        self.compare_factor: float         = compare_factor
        self.last_view:      Optional[CursorView] = None

        self._scheduler      = scheduler
        self._active_sched   = None
        self._generation     = 0
        self._event_handle   = None
        self._commit_handle  = None

        self._trace:    Sequence[Event]  = ()
        self._index:    int              = 0
        self._delay_s:  float            = 0.0
        self._cursor:   Optional[PlaybackCursor] = None
        self._on_state: Optional[Callable[[CursorView], None]] = None
        self._on_done:  Optional[Callable[[PlaybackOutcome], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def play(
        self,
        trace: Sequence[Event],
        delay_ms: float,
        on_state: Callable[[CursorView], None],
        on_done: Optional[Callable[[PlaybackOutcome], None]] = None,
        initial: Iterable[int] = (),
    ) -> None:
        """Start replaying `trace`.  Returns immediately."""
        if self.state is PlaybackState.PLAYING:
            logger.warning("Rejected play(): a playback is already active")
            raise ConcurrentPlaybackRejected("A playback is already active; cancel it first")
        if delay_ms <= 0:
            raise ValueError(f"delay_ms must be positive, got {delay_ms}")

        trace = tuple(trace)
        # an empty trace finishes without ever touching a scheduler
        sched = self._scheduler
        if trace and sched is None:
            sched = asyncio.get_running_loop()

        self._active_sched = sched
        self._generation += 1
        self._trace    = trace
        self._index    = 0
        self._delay_s  = delay_ms / 1000.0
        self._cursor   = PlaybackCursor(initial)
        self._on_state = on_state
        self._on_done  = on_done
        self.state     = PlaybackState.PLAYING

        logger.info("Playback started: %d events at %s ms", len(self._trace), delay_ms)

        if not self._trace:
            self._finish()
            return
        self._schedule_next()

    def cancel(self) -> None:
        """Stop at the next safe point.  No-op when nothing is playing."""
        if self.state is not PlaybackState.PLAYING:
            return
        consumed = self._index
        self._teardown()
        self.state = PlaybackState.CANCELLED
        logger.info("Playback cancelled after %d of %d events", consumed, len(self._trace))
        self._complete(PlaybackOutcome.CANCELLED)

    def restart(
        self,
        trace: Sequence[Event],
        delay_ms: float,
        on_state: Callable[[CursorView], None],
        on_done: Optional[Callable[[PlaybackOutcome], None]] = None,
        initial: Iterable[int] = (),
    ) -> None:
        """Tear down whatever is playing, then play `trace`."""
        self.cancel()
        self.play(trace, delay_ms, on_state, on_done, initial)

    async def play_async(
        self,
        trace: Sequence[Event],
        delay_ms: float,
        on_state: Optional[Callable[[CursorView], None]] = None,
        initial: Iterable[int] = (),
    ) -> PlaybackOutcome:
        """Play on the running loop and wait for the outcome."""
        loop = asyncio.get_running_loop()
        done: asyncio.Future = loop.create_future()

        def _resolve(outcome: PlaybackOutcome) -> None:
            if not done.done():
                done.set_result(outcome)

        self.play(trace, delay_ms, on_state or (lambda view: None), _resolve, initial)
        try:
            return await done
        except asyncio.CancelledError:
            self.cancel()
            raise

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def cursor(self) -> Optional[CursorView]:
        return self._cursor.view() if self._cursor else None

    @property
    def events_consumed(self) -> int:
        return self._index

    # ------------------------------------------------------------------
    # Internal — scheduling
    # ------------------------------------------------------------------
    def _schedule(self, seconds: float, fn: Callable[[], None]):
        return self._active_sched.call_later(seconds, self._fire, self._generation, fn)

    def _fire(self, generation: int, fn: Callable[[], None]) -> None:
        if generation != self._generation or self.state is not PlaybackState.PLAYING:
            return
        try:
            fn()
        except Exception:
            logger.exception("Playback callback failed; cancelling playback")
            self.cancel()
            raise

    def _schedule_next(self) -> None:
        event = self._trace[self._index]
        wait = self._delay_s
        if event.kind is EventKind.COMPARE:
            wait *= self.compare_factor
        self._event_handle = self._schedule(wait, self._step)

    # ------------------------------------------------------------------
    # Internal — event application
    # ------------------------------------------------------------------
    def _step(self) -> None:
        self._event_handle = None
        event = self._trace[self._index]
        self._index += 1

        self._cursor.apply(event)
        self._emit()
        if self.state is not PlaybackState.PLAYING:
            return  # cancelled from inside on_state

        if event.kind is EventKind.SWAP and self._cursor.swap_pending:
            self._commit_handle = self._schedule(self._delay_s * self.swap_fraction, self._commit)

        if self._index < len(self._trace):
            self._schedule_next()
        elif not self._cursor.swap_pending:
            self._finish()

    def _commit(self) -> None:
        self._commit_handle = None
        if self._cursor.commit_swap():
            self._emit()
            if self.state is not PlaybackState.PLAYING:
                return
        if self._index >= len(self._trace):
            self._finish()

    def _finish(self) -> None:
        self._cursor.clear_highlights()
        self._emit()
        if self.state is not PlaybackState.PLAYING:
            return
        self._teardown()
        self.state = PlaybackState.FINISHED
        logger.info("Playback finished after %d events", len(self._trace))
        self._complete(PlaybackOutcome.FINISHED)

    def _emit(self) -> None:
        view = self._cursor.view()
        self.last_view = view
        self._on_state(view)

    def _teardown(self) -> None:
        self._generation += 1
        for handle in (self._event_handle, self._commit_handle):
            if handle is not None:
                handle.cancel()
        self._event_handle  = None
        self._commit_handle = None

    def _complete(self, outcome: PlaybackOutcome) -> None:
        on_done = self._on_done
        self._cursor   = None
        self._on_state = None
        self._on_done  = None
        self._active_sched = None
        if on_done is not None:
            on_done(outcome)
