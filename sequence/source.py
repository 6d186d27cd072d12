"""
source.py — Where sequences come from
======================================
Two ways to get something to sort:

    random_sequence(50)                 # 50 values in 1..100
    parse_custom_input("64, 34, x, 25") # -> [64, 34, 25]

Custom input is forgiving: each token contributes its leading integer
("3.5" -> 3, "12px" -> 12), tokens without one are dropped, and only
an input with nothing usable left is an error.
"""

import random
import re
from typing import List, Optional

from sequence.values import InvalidInput

# optional sign then ASCII digits, anchored at the token start
_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def random_sequence(
    size: int,
    low: int = 1,
    high: int = 100,
    seed: Optional[int] = None,
) -> List[int]:
    """`size` integers drawn uniformly from [low, high]."""
    if size < 0:
        raise InvalidInput(f"Size must be non-negative, got {size}")
    if low > high:
        raise InvalidInput(f"Empty value range {low}..{high}")
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


def parse_custom_input(text: str, limit: Optional[int] = None) -> List[int]:
    """Parse comma-separated integers, skipping invalid tokens."""
    values: List[int] = []
    for token in (text or "").split(","):
        match = _LEADING_INT.match(token.strip())
        if match is None:
            continue
        values.append(int(match.group()))

    if not values:
        raise InvalidInput("No valid integers found in input")
    if limit is not None and len(values) > limit:
        raise InvalidInput(f"Too many values: {len(values)} (limit {limit})")
    return values
