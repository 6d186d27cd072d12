"""
values.py — Sequence validation
================================
The engine sorts finite numbers in ascending order and nothing else.
Anything that could make a runner emit a partial trace is rejected
here, before the first event is recorded.
"""

import math
from numbers import Integral, Real
from typing import Iterable, List, Sequence


class InvalidInput(ValueError):
    """Raised when a sequence cannot be handed to a runner."""


def validate_sequence(values: Iterable, integers_only: bool = False) -> List:
    """Return a private list copy of `values` or raise InvalidInput."""
    if isinstance(values, (str, bytes)):
        raise InvalidInput("Expected a sequence of numbers, got a string")
    try:
        items = list(values)
    except TypeError:
        raise InvalidInput(f"Expected a sequence of numbers, got {type(values).__name__}")

    for pos, v in enumerate(items):
        # bool is an int subclass but never a sortable value here
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InvalidInput(f"Value at position {pos} is not a number: {v!r}")
        if integers_only and not isinstance(v, Integral):
            raise InvalidInput(f"Value at position {pos} is not an integer: {v!r}")
        if not math.isfinite(v):
            raise InvalidInput(f"Value at position {pos} is not finite: {v!r}")
    return items


def is_sorted(values: Sequence) -> bool:
    return all(values[i] <= values[i + 1] for i in range(len(values) - 1))
