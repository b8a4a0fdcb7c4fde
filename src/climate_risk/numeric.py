"""Small numeric helpers shared by the scoring pipelines."""

import math

import numpy as np


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value to the closed interval [low, high]"""
    return float(np.clip(value, low, high))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round half up, like JavaScript's Math.round

    Python's built-in round() uses banker's rounding, which would move
    scores that sit exactly on a half step.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))
