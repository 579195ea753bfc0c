"""Seed XP: one-shot initial XP for a new player from early KD ratio.

Invariants:
    - compute_seed_xp always returns an int inside XP_MIN..XP_MAX
    - kd <= 0 or non-finite -> 10; 0 < kd < 1.0 -> 10
    - kd >= 1.0 -> 15..20, kd >= 2.0 -> 20..30, kd >= 3.0 -> 30..35 (inclusive)
    - Eligible only when teamless, exactly SEED_MATCH_COUNT completed qualifying
      matches, and xp still at the default
"""

import math
from dataclasses import dataclass

from xp_economy.core.domain_types import TeamId, Xp
from xp_economy.core.numeric import clamp_xp
from xp_economy.core.random_source import RandomSource

SEED_MATCH_COUNT = 3
DEFAULT_PLAYER_XP = 0
FLOOR_SEED_XP = 10


@dataclass(frozen=True)
class SeedXpRange:
    min: int
    max: int


# (minimum kd, range), checked top-down
KD_BRACKETS: tuple[tuple[float, SeedXpRange], ...] = (
    (3.0, SeedXpRange(30, 35)),
    (2.0, SeedXpRange(20, 30)),
    (1.0, SeedXpRange(15, 20)),
)


def seed_xp_range(kd: float) -> SeedXpRange:
    if not math.isfinite(kd) or kd <= 0:
        return SeedXpRange(FLOOR_SEED_XP, FLOOR_SEED_XP)
    for threshold, xp_range in KD_BRACKETS:
        if kd >= threshold:
            return xp_range
    return SeedXpRange(FLOOR_SEED_XP, FLOOR_SEED_XP)


def compute_seed_xp(kd: float, rng: RandomSource) -> Xp:
    """Roll an initial XP value inside the KD bracket."""
    xp_range = seed_xp_range(kd)
    return clamp_xp(rng.randint(xp_range.min, xp_range.max))


def kd_ratio(kills: int, deaths: int) -> float:
    """Kills per death; a deathless record counts its kills as the ratio."""
    if deaths == 0:
        return float(kills)
    return kills / deaths


def is_seed_eligible(
    team_id: TeamId | None,
    completed_matches: int,
    current_xp: int | None,
    required_matches: int = SEED_MATCH_COUNT,
    default_xp: int = DEFAULT_PLAYER_XP,
) -> bool:
    if team_id is not None:
        return False
    if completed_matches != required_matches:
        return False
    return (current_xp or 0) == default_xp
