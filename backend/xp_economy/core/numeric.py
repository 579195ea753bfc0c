"""Numeric helpers shared by the progression pipeline.

Invariants:
    - clamp_xp always returns an int inside XP_MIN..XP_MAX
    - round_half_up sends ties toward +inf (2.5 -> 3, -2.5 -> -2)
"""

import math

from xp_economy.core.domain_types import XP_MAX, XP_MIN, Xp


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_xp(xp: float) -> Xp:
    """Round then clamp into the XP range."""
    return Xp(int(clamp(round_half_up(xp), XP_MIN, XP_MAX)))
