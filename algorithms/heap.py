"""
heap.py — Heap Sort
====================
Builds a max-heap bottom-up, then repeatedly moves the root behind the
shrinking heap boundary.

`_heapify` records a compare against the left child, then a compare of
the right child against whichever of node/left won, and a swap + update
when a child wins (then sinks into that child).  Each extraction is a
swap + update of [0, boundary].
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import validate_sequence


PSEUDOCODE: List[str] = [
    "def heap_sort(arr):",
    "    for i in n//2-1 .. 0:",
    "        heapify(arr, n, i)",
    "    for end in n-1 .. 1:",
    "        swap(arr[0], arr[end])",
    "        heapify(arr, end, 0)",
    "",
    "def heapify(arr, size, i):",
    "    largest ← max of i, left(i), right(i)",
    "    if largest != i:",
    "        swap(arr[i], arr[largest])",
    "        heapify(arr, size, largest)",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 8,
    EventKind.SWAP:    10,
    EventKind.UPDATE:  10,
}


def heap_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values)
    n = len(arr)

    for i in range(n // 2 - 1, -1, -1):
        _heapify(arr, n, i, sink)

    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        sink.exchange(arr, 0, end)
        _heapify(arr, end, 0, sink)

    return arr


def _heapify(arr: List[int], size: int, i: int, sink: TraceBuilder) -> None:
    largest = i
    left  = 2 * i + 1
    right = 2 * i + 2

    if left < size:
        sink.compare(largest, left)
        if arr[left] > arr[largest]:
            largest = left

    if right < size:
        sink.compare(largest, right)
        if arr[right] > arr[largest]:
            largest = right

    if largest != i:
        arr[i], arr[largest] = arr[largest], arr[i]
        sink.exchange(arr, i, largest)
        _heapify(arr, size, largest, sink)
