"""
cursor.py — Playback Cursor
============================
The single authoritative picture of "what is on screen right now"
during replay of a trace:

    • sequence  – the displayed contents
    • comparing – indices highlighted as being compared
    • swapping  – indices highlighted as being swapped
    • position  – how many events have been consumed

A swap is a two-step state machine:

    NONE / APPLIED  →  begin_swap()   →  HIGHLIGHTING
    HIGHLIGHTING    →  commit_swap()  →  APPLIED

While HIGHLIGHTING, the swap's snapshot is held back so the highlight
can render before the bars move.  An update arriving in that window is
folded into the pending snapshot instead of being applied early.

Only the owner (PlaybackController or Stepper) mutates the cursor; the
renderer receives frozen CursorView copies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from algorithms.event import Event, EventKind


class SwapPhase(Enum):
    NONE         = "none"
    HIGHLIGHTING = "highlighting"
    APPLIED      = "applied"


@dataclass(frozen=True)
class CursorView:
    sequence:   Tuple[int, ...] = ()
    comparing:  Tuple[int, ...] = ()
    swapping:   Tuple[int, ...] = ()
    position:   int             = 0

    def to_dict(self) -> dict:
        return {
            "array":     list(self.sequence),
            "comparing": list(self.comparing),
            "swapping":  list(self.swapping),
            "position":  self.position,
        }


class PlaybackCursor:
    """
    Attributes:
        sequence  : Displayed contents (list, owned).
        comparing : Currently highlighted comparison indices.
        swapping  : Currently highlighted swap indices.
        position  : Number of events applied so far.
        phase     : SwapPhase of the most recent swap.
    """

    def __init__(self, initial: Iterable[int] = ()):
        self.sequence:  List[int]        = list(initial)
        self.comparing: Tuple[int, ...]  = ()
        self.swapping:  Tuple[int, ...]  = ()
        self.position:  int              = 0
        self.phase:     SwapPhase        = SwapPhase.NONE
        self._pending:  Optional[Tuple[int, ...]] = None

    # ------------------------------------------------------------------
    # Event application
    # ------------------------------------------------------------------
    def apply(self, event: Event) -> None:
        """Apply one event.  A swap is left HIGHLIGHTING; see commit_swap()."""
        if event.kind is EventKind.COMPARE:
            self._settle()
            self.comparing = event.indices
            self.swapping  = ()
        elif event.kind is EventKind.SWAP:
            self._begin_swap(event)
        elif event.kind is EventKind.UPDATE:
            self._apply_update(event)
        self.position += 1

    def commit_swap(self) -> bool:
        """Apply the held-back swap snapshot.  Returns True if contents changed."""
        if self.phase is not SwapPhase.HIGHLIGHTING:
            return False
        if self._pending is not None:
            self.sequence = list(self._pending)
        self._pending = None
        self.phase    = SwapPhase.APPLIED
        return True

    def clear_highlights(self) -> None:
        self._settle()
        self.comparing = ()
        self.swapping  = ()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def swap_pending(self) -> bool:
        return self.phase is SwapPhase.HIGHLIGHTING

    def view(self) -> CursorView:
        return CursorView(
            sequence=tuple(self.sequence),
            comparing=tuple(self.comparing),
            swapping=tuple(self.swapping),
            position=self.position,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _begin_swap(self, event: Event) -> None:
        self._settle()
        self.comparing = ()
        self.swapping  = event.indices
        if event.snapshot is not None:
            self._pending = event.snapshot
            self.phase    = SwapPhase.HIGHLIGHTING
        else:
            self.phase    = SwapPhase.APPLIED

    def _apply_update(self, event: Event) -> None:
        if event.snapshot is None:
            return
        if self.phase is SwapPhase.HIGHLIGHTING:
            self._pending = event.snapshot
        else:
            self.sequence = list(event.snapshot)

    def _settle(self) -> None:
        # a new event never starts on top of an uncommitted swap
        if self.phase is SwapPhase.HIGHLIGHTING:
            self.commit_swap()
