"""
event.py — Trace Events
========================
Every runner records what it does as a flat, ordered list of Events.
An Event is a frozen-in-time record of ONE algorithmic action:

    • compare – two (or, for counting sort, one) positions are inspected
    • swap    – positions whose contents were just exchanged / written
    • update  – the sequence contents after a mutation

Design decisions:
  - Event is a frozen dataclass.  Snapshots are tuples so nothing a
    consumer does can reach back into the runner's working list.
  - The runner is the only writer (through a TraceBuilder); the
    playback layer and the renderer are pure readers.
  - `snapshot` is None for pure compare events.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple


class EventKind(Enum):
    COMPARE = "compare"
    SWAP    = "swap"
    UPDATE  = "update"


@dataclass(frozen=True)
class Event:
    """
    Attributes:
        kind     : EventKind of this action.
        indices  : 1 or 2 positions involved (0-based).
        snapshot : Full copy of the sequence at emission, or None.
    """

    kind:      EventKind
    indices:   Tuple[int, ...]
    snapshot:  Optional[Tuple[int, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type":    self.kind.value,
            "indices": list(self.indices),
            "array":   list(self.snapshot) if self.snapshot is not None else None,
        }


Trace = Tuple[Event, ...]


# ---------------------------------------------------------------------------
# Event sink handed to every runner (and down into its recursive helpers)
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Growable, runner-owned accumulator of Events.

    Usage inside a runner:
        sink.compare(j, j + 1)
        arr[j], arr[j + 1] = arr[j + 1], arr[j]
        sink.exchange(arr, j, j + 1)      # swap + update
        trace = sink.build()
    """

    def __init__(self):
        self._events: List[Event] = []

    def compare(self, *indices: int) -> None:
        self._events.append(Event(EventKind.COMPARE, tuple(indices)))

    def swap(self, arr: Sequence[int], *indices: int) -> None:
        self._events.append(Event(EventKind.SWAP, tuple(indices), tuple(arr)))

    def update(self, arr: Sequence[int], *indices: int) -> None:
        self._events.append(Event(EventKind.UPDATE, tuple(indices), tuple(arr)))

    def exchange(self, arr: Sequence[int], *indices: int) -> None:
        """Record a mutation that already happened: swap then update."""
        self.swap(arr, *indices)
        self.update(arr, *indices)

    def build(self) -> Trace:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def apply_trace(initial: Iterable[int], trace: Iterable[Event]) -> List[int]:
    """Apply every snapshot in order to `initial`; return the final contents."""
    current = list(initial)
    for event in trace:
        if event.snapshot is not None:
            current = list(event.snapshot)
    return current


def snapshots(trace: Iterable[Event]) -> List[Tuple[int, ...]]:
    return [e.snapshot for e in trace if e.snapshot is not None]


def count_kinds(trace: Iterable[Event]) -> Dict[EventKind, int]:
    counts = {kind: 0 for kind in EventKind}
    for event in trace:
        counts[event.kind] += 1
    return counts
