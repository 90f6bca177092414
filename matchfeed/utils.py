"""Small numeric helpers shared across the scoring modules."""

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Python's built-in round() uses banker's rounding (round(0.5) == 0),
    which would move display scores that sit exactly on a .5 boundary.
    """
    return int(math.floor(value + 0.5))
