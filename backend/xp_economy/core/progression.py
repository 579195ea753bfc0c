"""Progression Planning: the pure half of a match's XP update.

Invariants:
    - Pure: no IO, no async; all randomness drawn from the given RandomSource
    - Draw order is fixed: team gate, home picks, away picks
    - team_delta == 0 yields an empty base_deltas map (nothing to load or persist)
    - Away side receives -team_delta; contributions merge by player id
    - Missing teams, empty squads or a missing result raise InputIncompleteError;
      an unclassifiable result raises InvalidResultError

Design Decisions:
    - Split from services/progression_service.py: the service owns loading and
      persistence, this module owns every decision (impureim sandwich)
"""

from dataclasses import dataclass, field

from xp_economy.core.domain_types import MatchResult, PlayerId, TeamDelta
from xp_economy.core.errors import InputIncompleteError
from xp_economy.core.match_outcome import actual_score
from xp_economy.core.random_source import RandomSource
from xp_economy.core.rating_model import SIMULATION_SCALING_FACTOR, win_probability
from xp_economy.core.roster import TeamSnapshot, UserContext
from xp_economy.core.squad_distribution import distribute_to_squad, merge_distributions
from xp_economy.core.team_delta import compute_team_delta
from xp_economy.core.team_strength import (
    SQUAD_MIN_LENGTH, TeamStrength, compute_team_strength,
)


@dataclass(frozen=True)
class ProgressionPlan:
    """Everything decided before current player state is loaded."""
    home: TeamStrength
    away: TeamStrength
    expected_home: float
    actual_home: float
    team_delta: TeamDelta
    base_deltas: dict[PlayerId, int] = field(default_factory=dict)

    @property
    def affected_ids(self) -> list[PlayerId]:
        return [pid for pid, delta in self.base_deltas.items() if delta != 0]


def plan_match_progression(
    home_team: TeamSnapshot | None,
    away_team: TeamSnapshot | None,
    result: MatchResult | str | None,
    user_context: UserContext | None,
    rng: RandomSource,
    scaling_factor: float = SIMULATION_SCALING_FACTOR,
    squad_min_length: int = SQUAD_MIN_LENGTH,
) -> ProgressionPlan:
    """Strength -> probability -> team delta -> per-player base deltas."""
    if home_team is None or away_team is None:
        raise InputIncompleteError("team")
    if result is None:
        raise InputIncompleteError("result")

    ctx = user_context or UserContext()
    home = compute_team_strength(home_team, ctx, squad_min_length)
    away = compute_team_strength(away_team, ctx, squad_min_length)
    if not home.squad or not away.squad:
        raise InputIncompleteError("squad")

    actual_home = actual_score(result)
    expected_home = win_probability(home.rating, away.rating, scaling_factor)

    team_delta = compute_team_delta(expected_home, actual_home, rng)
    if team_delta == 0:
        return ProgressionPlan(home, away, expected_home, actual_home, team_delta)

    base_deltas = merge_distributions(
        distribute_to_squad(team_delta, home.squad, rng),
        distribute_to_squad(-team_delta, away.squad, rng),
    )
    return ProgressionPlan(
        home, away, expected_home, actual_home, team_delta, base_deltas,
    )
