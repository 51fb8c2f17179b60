"""Shared rounding and completion figures for progress displays."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def completion_percent(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)
