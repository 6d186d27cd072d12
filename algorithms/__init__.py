"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows
about.

    from algorithms import REGISTRY, get_algorithm, resolve_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, tags, …),
        …
    }

Every `fn` is a runner: fn(values, sink) -> sorted copy, recording its
events into the TraceBuilder it is given.  Adding an algorithm is:
write the runner, add one entry here.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from algorithms.event     import Event, EventKind, Trace, TraceBuilder, apply_trace
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc, EVENT_LINES as _bubble_lines
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc, EVENT_LINES as _selection_lines
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc, EVENT_LINES as _insertion_lines
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc, EVENT_LINES as _merge_lines
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc, EVENT_LINES as _quick_lines
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc, EVENT_LINES as _heap_lines
from algorithms.counting  import counting_sort  as _counting,  PSEUDOCODE as _counting_pc, EVENT_LINES as _counting_lines

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "bubble"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bubble"
    label:             str                    # human label, e.g. "Bubble Sort"
    fn:                Callable               # the runner
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)   # e.g. ["comparison", "stable"]
    integers_only:     bool     = False       # distribution sorts need integer keys
    stable:            bool     = False
    complexity_time:   str      = ""          # e.g. "O(n²)"
    complexity_space:  str      = ""          # e.g. "O(1)"
    description:       str      = ""          # one-liner for the UI card
    event_lines:       Dict[EventKind, int] = field(default_factory=dict)

    def run(self, values: Sequence[int]) -> Tuple[List[int], Trace]:
        """Run to completion on a private copy; return (sorted, trace)."""
        sink = TraceBuilder()
        result = self.fn(values, sink)
        return result, sink.build()

    def pseudocode_line(self, event: Optional[Event]) -> int:
        """Pseudocode line to highlight for `event`, or -1."""
        if event is None:
            return -1
        return self.event_lines.get(event.kind, -1)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        event_lines=_bubble_lines,
        tags=["comparison", "in-place", "stable", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly steps through the list, compares adjacent elements, "
                    "and swaps them if they are in the wrong order.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        event_lines=_selection_lines,
        tags=["comparison", "in-place", "quadratic"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Divides the input into a sorted and an unsorted region, and "
                    "repeatedly selects the smallest element from the unsorted region.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        event_lines=_insertion_lines,
        tags=["comparison", "in-place", "stable", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Builds the sorted array one item at a time by comparing each "
                    "with the items before it.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        event_lines=_merge_lines,
        tags=["comparison", "divide-and-conquer", "stable"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Divides the array into halves, sorts them, and then merges "
                    "them back together.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        event_lines=_quick_lines,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) average, O(n²) worst case", complexity_space="O(log n)",
        description="Selects a 'pivot' element and partitions the array around the pivot.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        event_lines=_heap_lines,
        tags=["comparison", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a heap from the array and repeatedly extracts the "
                    "maximum element.",
    ),

    "counting": AlgoInfo(
        key="counting", label="Counting Sort", fn=_counting, pseudocode=_counting_pc,
        event_lines=_counting_lines,
        tags=["distribution", "stable"], integers_only=True, stable=True,
        complexity_time="O(n + k)", complexity_space="O(n + k)",
        description="Counts the occurrences of each element and reconstructs the "
                    "array in order. k is the range of input.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def resolve_algorithm(key: Optional[str]) -> AlgoInfo:
    """Return AlgoInfo by key; unknown keys fall back to bubble sort."""
    info = REGISTRY.get(key) if key else None
    if info is None:
        logger.warning("Unknown algorithm %r, falling back to %s", key, DEFAULT_ALGORITHM)
        info = REGISTRY[DEFAULT_ALGORITHM]
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "Event",
    "EventKind",
    "Trace",
    "TraceBuilder",
    "apply_trace",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
]
