"""
Vector and boundary helpers for the ball game
"""

from __future__ import annotations
import math
from typing import Tuple


def unit(x: float, y: float) -> Tuple[float, float]:
    """Direction of (x, y); a zero vector stays zero"""
    length = math.hypot(x, y)
    if length == 0.0:
        return 0.0, 0.0
    return x / length, y / length


def confine_axis(pos: float, lo: float, hi: float) -> Tuple[float, int]:
    """
    Pull ``pos`` back inside ``[lo, hi]`` and report how many bounds it crossed.

    The low bound is applied first and the high bound second, so in a window
    narrower than the entity (``lo > hi``) the entity ends on ``hi`` having
    crossed both.
    """
    crossed = 0
    if pos < lo:
        pos = lo
        crossed += 1
    if pos > hi:
        pos = hi
        crossed += 1
    return pos, crossed


def touching(a, b) -> bool:
    """True when two round entities overlap or just touch"""
    return math.hypot(a.x - b.x, a.y - b.y) <= (a.size + b.size) / 2.0
