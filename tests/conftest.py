"""Root conftest — shared fixtures for all test suites."""
import heapq
import itertools
import os
import sys

import pytest

# Ensure the project root is on sys.path so ``from engine import …`` works.
_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)


class ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for an event loop's call_later()."""

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback, *args):
        handle = ManualHandle()
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), handle, callback, args))
        return handle

    @property
    def pending(self):
        return sum(1 for _, _, h, _, _ in self._queue if not h.cancelled)

    def advance(self, seconds):
        """Run every callback due within the next `seconds`."""
        deadline = self.now + seconds
        while self._queue and self._queue[0][0] <= deadline + 1e-9:
            when, _, handle, callback, args = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled:
                callback(*args)
        self.now = deadline

    def run_all(self, limit=100000):
        steps = 0
        while self._queue and steps < limit:
            when, _, handle, callback, args = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled:
                callback(*args)
            steps += 1


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def scheduler_factory():
    return ManualScheduler
