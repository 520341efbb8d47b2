import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round(2.5) == 3).

    Python's round() uses banker's rounding, which makes day counts and
    rest reductions drift on exact halves.
    """
    return math.floor(value + 0.5)
