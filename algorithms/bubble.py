"""
bubble.py — Bubble Sort
========================
Walks the unsorted prefix comparing adjacent pairs and exchanging the
ones that are out of order.  Records:
  1. every adjacent comparison          →  compare [j, j+1]
  2. every exchange of an inverted pair →  swap + update [j, j+1]

One compare event per comparison: how long a comparison stays on
screen is a playback setting, not something the trace encodes.
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",
    "    for i in 0 .. n-2:",
    "        for j in 0 .. n-i-2:",
    "            if arr[j] > arr[j+1]:",
    "                swap(arr[j], arr[j+1])",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 3,
    EventKind.SWAP:    4,
    EventKind.UPDATE:  4,
}


def bubble_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    n = len(arr)

    for i in range(n - 1):
        for j in range(n - i - 1):
            sink.compare(j, j + 1)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                sink.exchange(arr, j, j + 1)

    return arr
