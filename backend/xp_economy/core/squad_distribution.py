"""Squad Distribution: fans a team delta out to individual squad members.

Invariants:
    - Every squad member appears in the returned map (0 when untouched)
    - |team_delta| == 1: exactly min(3, len(squad)) members get sign * 1
    - |team_delta| == 2: every member gets sign * 1, exactly min(2, len(squad))
      distinct members get a second sign * 1
    - Values stay inside -PLAYER_DELTA_MAX..PLAYER_DELTA_MAX before merging

Design Decisions:
    - Picks come from RandomSource.sample (shrinking candidate list), so a
      scripted source fully determines who moves
    - merge_distributions sums by id; a player listed on both sides nets out
"""

from typing import Sequence

from xp_economy.core.domain_types import PlayerDelta, PlayerId, TeamDelta
from xp_economy.core.random_source import RandomSource
from xp_economy.core.roster import PlayerSnapshot

SINGLE_STEP_PICKS = 3
DOUBLE_STEP_BONUS_PICKS = 2


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def distribute_to_squad(
    team_delta: TeamDelta, squad: Sequence[PlayerSnapshot], rng: RandomSource,
) -> dict[PlayerId, PlayerDelta]:
    """Map player id -> pre-multiplier delta for one side of a match."""
    sign = _sign(team_delta)
    mag = abs(team_delta)
    deltas = {p.id: 0 for p in squad}

    if mag == 0 or not squad:
        return deltas

    if mag == 1:
        for p in rng.sample(squad, min(SINGLE_STEP_PICKS, len(squad))):
            deltas[p.id] += sign
    else:
        for p in squad:
            deltas[p.id] += sign
        for p in rng.sample(squad, min(DOUBLE_STEP_BONUS_PICKS, len(squad))):
            deltas[p.id] += sign

    return deltas


def merge_distributions(
    *distributions: dict[PlayerId, PlayerDelta],
) -> dict[PlayerId, int]:
    """Sum per-player contributions across sides, keeping first-seen order."""
    merged: dict[PlayerId, int] = {}
    for dist in distributions:
        for player_id, delta in dist.items():
            merged[player_id] = merged.get(player_id, 0) + delta
    return merged
