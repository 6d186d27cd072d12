"""
sequence/
---------
Input side of the engine.  Public API:

    from sequence import validate_sequence, InvalidInput
    from sequence import random_sequence, parse_custom_input
"""

from sequence.values import InvalidInput, validate_sequence, is_sorted
from sequence.source import random_sequence, parse_custom_input

__all__ = [
    "InvalidInput",
    "validate_sequence",
    "is_sorted",
    "random_sequence",
    "parse_custom_input",
]
