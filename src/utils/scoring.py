"""Numeric helpers shared by submissions and analytics."""

import math
import re

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's round() uses banker's rounding (round(2.5) == 2); scores are
    reported the way the frontend computes them, so 2.5 -> 3 and -2.5 -> -2.
    """
    return math.floor(value + 0.5)


def parse_int(value, default: int | None = None) -> int | None:
    """Parse a loosely-typed JSON value into an int.

    Accepts ints, finite floats (truncated toward zero) and strings with a
    leading integer ("85", " 85 points", "85.9"). Anything else returns
    `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return default
        try:
            return int(match.group(1))
        except ValueError:
            # digit strings beyond sys.get_int_max_str_digits()
            return default
    return default
