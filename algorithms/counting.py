"""
counting.py — Counting Sort
============================
Distribution sort over integer keys.  Four phases, every event naming a
single position:

  1. range scan   – compare [i] for i = 1 .. n-1 while tracking min/max
  2. tally        – compare [i] for every element as it is counted
  3. placement    – in descending scan order, each element is exchanged
                    into its output position p  →  swap + update [p]
  4. write-back   – one swap + update [k] per position, left to right

Placement exchanges instead of overwriting: an element already sitting
in its output slot is never displaced again (output slots are
distinct), so after phase 3 the sequence is sorted and every snapshot
along the way holds exactly the input's values.  Keys are offset by the
minimum, so negative integers sort too.
"""

from typing import Dict, List, Sequence

from algorithms.event import EventKind, TraceBuilder
from sequence.values import InvalidInput, validate_sequence


# widest key range the count table is allowed to cover
MAX_KEY_RANGE = 1_000_000

PSEUDOCODE: List[str] = [
    "def counting_sort(arr):",
    "    lo, hi ← min(arr), max(arr)",
    "    for x in arr: count[x - lo] += 1",
    "    for v in 1 .. hi-lo: count[v] += count[v-1]",
    "    for i in n-1 .. 0:",
    "        count[arr[i] - lo] -= 1",
    "        output[count[arr[i] - lo]] ← arr[i]",
    "    arr ← output",
]

# pseudocode line shown for each kind of event
EVENT_LINES: Dict[EventKind, int] = {
    EventKind.COMPARE: 2,
    EventKind.SWAP:    6,
    EventKind.UPDATE:  6,
}


def counting_sort(values: Sequence[int], sink: TraceBuilder) -> List[int]:
    arr = validate_sequence(values, integers_only=True)
    n = len(arr)
    if n == 0:
        return arr

    # -- 1. range scan --
    lo = hi = arr[0]
    for i in range(1, n):
        sink.compare(i)
        if arr[i] > hi:
            hi = arr[i]
        if arr[i] < lo:
            lo = arr[i]

    if hi - lo + 1 > MAX_KEY_RANGE:
        raise InvalidInput(
            f"Key range {lo}..{hi} is too wide for counting sort (max {MAX_KEY_RANGE})"
        )

    # -- 2. tally --
    count = [0] * (hi - lo + 1)
    for i in range(n):
        sink.compare(i)
        count[arr[i] - lo] += 1

    for v in range(1, len(count)):
        count[v] += count[v - 1]

    # -- 3. placement --
    original = list(arr)
    pos_of  = list(range(n))    # original index → current position
    orig_at = list(range(n))    # current position → original index
    for i in range(n - 1, -1, -1):
        key = original[i] - lo
        count[key] -= 1
        dest = count[key]
        p = pos_of[i]
        if p != dest:
            other = orig_at[dest]
            arr[p], arr[dest] = arr[dest], arr[p]
            orig_at[p], orig_at[dest] = other, i
            pos_of[other], pos_of[i] = p, dest
        sink.exchange(arr, dest)

    # -- 4. write-back --
    for k in range(n):
        sink.exchange(arr, k)

    return arr
