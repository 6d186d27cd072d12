"""
merge.py — Merge Sort
======================
Top-down merge sort.  Each merge copies the range's two sorted halves
into an auxiliary buffer and then places the smallest remaining head,
one element at a time, at the next output position k.

After every placement the range is rewritten as

    merged prefix | what is left of the left half | what is left of the right half

so the snapshot is always a rearrangement of the input and both
candidate heads have a real position inside the range:

    left head  → k
    right head → k + (items left in the left half)

Records, per placed element:
  1. compare [left head, right head]   (only while both halves remain)
  2. swap + update [k]
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, lo, hi):",
    "    if lo >= hi: return",
    "    mid ← (lo + hi) // 2",
    "    merge_sort(arr, lo, mid)",
    "    merge_sort(arr, mid+1, hi)",
    "    merge(arr, lo, mid, hi)",
    "",
    "def merge(arr, lo, mid, hi):",
    "    aux ← arr[lo..hi]",
    "    while both halves non-empty:",
    "        place smaller head at k",
    "    drain whichever half remains",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 9,
    EventKind.SWAP:    10,
    EventKind.UPDATE:  10,
}


def merge_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    if len(arr) > 1:
        _merge_sort(arr, 0, len(arr) - 1, sink)
    return arr


def _merge_sort(arr: List[int], lo: int, hi: int, sink: TraceBuilder) -> None:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    _merge_sort(arr, lo, mid, sink)
    _merge_sort(arr, mid + 1, hi, sink)
    _merge(arr, lo, mid, hi, sink)


def _merge(arr: List[int], lo: int, mid: int, hi: int, sink: TraceBuilder) -> None:
    aux   = arr[lo:hi + 1]
    left  = aux[:mid - lo + 1]
    right = aux[mid - lo + 1:]
    merged: List[int] = []
    i = j = 0
    k = lo

    def place() -> None:
        nonlocal k
        arr[lo:hi + 1] = merged + left[i:] + right[j:]
        sink.exchange(arr, k)
        k += 1

    while i < len(left) and j < len(right):
        sink.compare(k, k + len(left) - i)
        if left[i] <= right[j]:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
        place()

    while i < len(left):
        merged.append(left[i])
        i += 1
        place()

    while j < len(right):
        merged.append(right[j])
        j += 1
        place()
