"""
selection.py — Selection Sort
==============================
Grows a sorted prefix by scanning the rest for its minimum.

The first comparison of every pass is recorded as [i, i+1] so the
renderer can draw it as an adjacent pair; afterwards each comparison is
[current_min, candidate].  A pass that finds a smaller element ends
with a swap + update of [i, min].
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",
    "    for i in 0 .. n-2:",
    "        min ← i",
    "        for j in i+1 .. n-1:",
    "            if arr[j] < arr[min]: min ← j",
    "        if min != i:",
    "            swap(arr[i], arr[min])",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 4,
    EventKind.SWAP:    6,
    EventKind.UPDATE:  6,
}


def selection_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    n = len(arr)

    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            # min_idx is still i on the first comparison of the pass
            sink.compare(min_idx, j)
            if arr[j] < arr[min_idx]:
                min_idx = j

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            sink.exchange(arr, i, min_idx)

    return arr
