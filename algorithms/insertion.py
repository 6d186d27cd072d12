"""
insertion.py — Insertion Sort
==============================
Takes each element in turn (the key) and walks it left past every
larger neighbour.

Each step left is recorded as:
    compare [key_pos, key_pos-1]  →  swap [j, j+1]  →  update [j, j+1]
The comparison that stops the walk is recorded too, and every pass ends
with one update at the key's resting position.

The walk exchanges neighbours instead of copying them right over the
key, so every snapshot holds exactly the input's values.
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",
    "    for i in 1 .. n-1:",
    "        key ← arr[i]",
    "        j ← i - 1",
    "        while j >= 0 and arr[j] > key:",
    "            arr[j+1] ← arr[j]",
    "            j ← j - 1",
    "        arr[j+1] ← key",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 4,
    EventKind.SWAP:    5,
    EventKind.UPDATE:  7,
}


def insertion_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    n = len(arr)

    for i in range(1, n):
        key = arr[i]
        j = i - 1

        sink.compare(j + 1, j)
        while j >= 0 and arr[j] > key:
            arr[j], arr[j + 1] = arr[j + 1], arr[j]
            sink.exchange(arr, j, j + 1)
            j -= 1
            if j >= 0:
                sink.compare(j + 1, j)

        sink.update(arr, j + 1)

    return arr
