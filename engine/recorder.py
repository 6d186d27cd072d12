"""
recorder.py — Run Recorder & Analytics
========================================
Runs one registered algorithm to completion on one input, keeps the
resulting trace, and computes the numbers the Analytics panel shows.

Usage:
    rec = Recorder()
    rec.start(algo_key="merge", values=[9, 1, 8, 2])
    rec.run_to_completion()          # runs the runner, builds the trace
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both to completion
    on the SAME input, then calls compare(rec1, rec2) → ComparisonResult.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from algorithms import AlgoInfo, resolve_algorithm
from algorithms.event import EventKind, Trace, apply_trace, count_kinds
from engine.stepper import Stepper
from sequence.values import validate_sequence

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    size:            int   = 0
    comparisons:     int   = 0          # compare events
    swaps:           int   = 0          # swap events
    updates:         int   = 0          # update events
    total_events:    int   = 0
    wall_time_ms:    float = 0.0        # wall-clock time of the runner
    verified:        bool  = False      # replaying the trace gives the sorted input


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_events:      str = ""   # which algo is over sooner on screen


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        initial  : The input as handed to the runner.
        result   : The runner's returned (sorted) sequence.
        trace    : Full trace from the run.
        metrics  : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.initial:  List[int]            = []
        self.result:   List[int]            = []
        self.trace:    Trace                = ()
        self.metrics:  Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, values: Sequence[int]) -> AlgoInfo:
        """Pick the runner (unknown keys fall back to bubble) and check the input."""
        info = resolve_algorithm(algo_key)
        self.initial    = validate_sequence(values, integers_only=info.integers_only)
        self._algo_info = info
        self.result     = []
        self.trace      = ()
        self.metrics    = None
        return info

    def run_to_completion(self) -> RunMetrics:
        """Run the algorithm, keep the trace, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        start = time.monotonic()
        self.result, self.trace = self._algo_info.run(self.initial)
        wall_ms = (time.monotonic() - start) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "Recorded %s on %d values: %d events (%.2f ms)",
            self._algo_info.key, len(self.initial), len(self.trace), wall_ms,
        )
        if not self.metrics.verified:
            logger.error("Trace replay of %s does not reproduce the sorted input", self._algo_info.key)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    def stepper(self) -> Stepper:
        """A Stepper positioned on the first frame of this run."""
        if self.metrics is None:
            raise RuntimeError("Call run_to_completion() first.")
        stepper = Stepper()
        stepper.start(self.trace, self.initial)
        return stepper

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "initial":  list(self.initial),
            "result":   list(self.result),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "events":   [e.to_dict() for e in self.trace],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info   = self._algo_info
        counts = count_kinds(self.trace)
        expected = sorted(self.initial)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            size=len(self.initial),
            comparisons=counts[EventKind.COMPARE],
            swaps=counts[EventKind.SWAP],
            updates=counts[EventKind.UPDATE],
            total_events=len(self.trace),
            wall_time_ms=round(wall_ms, 2),
            verified=(apply_trace(self.initial, self.trace) == expected and self.result == expected),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps      =winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_events     =winner(l.total_events, r.total_events, l.algo_label, r.algo_label),
    )
