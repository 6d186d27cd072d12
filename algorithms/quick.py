"""
quick.py — Quick Sort (Lomuto partition)
=========================================
The last element of each range is the pivot.  Records:
  1. every scanned element vs. the pivot     →  compare [j, hi]
  2. every element ≤ pivot joining the low side →  swap + update [i, j]
  3. the pivot moving into its final place   →  swap + update [i+1, hi]

Ranges of length ≤ 1 are left alone.
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, lo, hi):",
    "    if lo < hi:",
    "        p ← partition(arr, lo, hi)",
    "        quick_sort(arr, lo, p-1)",
    "        quick_sort(arr, p+1, hi)",
    "",
    "def partition(arr, lo, hi):",
    "    pivot ← arr[hi]; i ← lo - 1",
    "    for j in lo .. hi-1:",
    "        if arr[j] <= pivot:",
    "            i ← i + 1; swap(arr[i], arr[j])",
    "    swap(arr[i+1], arr[hi])",
    "    return i + 1",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 9,
    EventKind.SWAP:    10,
    EventKind.UPDATE:  10,
}


def quick_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    _quick_sort(arr, 0, len(arr) - 1, sink)
    return arr


def _quick_sort(arr: List[int], lo: int, hi: int, sink: TraceBuilder) -> None:
    if lo < hi:
        p = _partition(arr, lo, hi, sink)
        _quick_sort(arr, lo, p - 1, sink)
        _quick_sort(arr, p + 1, hi, sink)


def _partition(arr: List[int], lo: int, hi: int, sink: TraceBuilder) -> int:
    pivot = arr[hi]
    i = lo - 1

    for j in range(lo, hi):
        sink.compare(j, hi)
        if arr[j] <= pivot:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
            sink.exchange(arr, i, j)

    arr[i + 1], arr[hi] = arr[hi], arr[i + 1]
    sink.exchange(arr, i + 1, hi)
    return i + 1
