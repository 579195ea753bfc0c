"""Team Delta: turns the gap between expected and actual score into a small gated integer.

Invariants:
    - Result is an int in -TEAM_DELTA_MAX..TEAM_DELTA_MAX
    - A zero base delta returns 0 without drawing from the random source
    - Gate probability is clamp(round(20 + |surprise| * 70), 15, 90) percent

Design Decisions:
    - K factor of 4 keeps deltas tiny; most "as expected" results round to 0
    - The gate makes even large upsets non-deterministic (at most 90%)
"""

from xp_economy.core.domain_types import TEAM_DELTA_MAX, TeamDelta
from xp_economy.core.numeric import clamp, round_half_up
from xp_economy.core.random_source import RandomSource

K_FACTOR = 4
GATE_BASE_PCT = 20
GATE_SURPRISE_PCT = 70
GATE_MIN_PCT = 15
GATE_MAX_PCT = 90


def team_gate_percent(surprise: float) -> int:
    """Chance (percent) that a nonzero team delta survives."""
    pbx = round_half_up(GATE_BASE_PCT + abs(surprise) * GATE_SURPRISE_PCT)
    return int(clamp(pbx, GATE_MIN_PCT, GATE_MAX_PCT))


def base_team_delta(surprise: float) -> TeamDelta:
    raw = round_half_up(K_FACTOR * surprise)
    return TeamDelta(int(clamp(raw, -TEAM_DELTA_MAX, TEAM_DELTA_MAX)))


def compute_team_delta(
    expected_home: float, actual_home: float, rng: RandomSource,
) -> TeamDelta:
    """Gated team delta from the home side's perspective."""
    surprise = actual_home - expected_home
    base = base_team_delta(surprise)
    if base == 0:
        return TeamDelta(0)
    if not rng.chance(team_gate_percent(surprise)):
        return TeamDelta(0)
    return base
