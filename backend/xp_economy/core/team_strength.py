"""Team Strength: squad selection and the scalar rating fed into the win probability.

Invariants:
    - Squad selection is deterministic: starters first, then backfill, both in
      roster order, trimmed to the target size
    - The user's own player is never part of a squad
    - Target size is squad_min_length - 1 on the user's own team, squad_min_length elsewhere
    - rating = sum(total_xp(p.xp) for p in squad) + team.prestige + team.tier
"""

from dataclasses import dataclass

from xp_economy.core.roster import PlayerSnapshot, TeamSnapshot, UserContext

SQUAD_MIN_LENGTH = 5


@dataclass(frozen=True)
class TeamStrength:
    rating: float
    squad: tuple[PlayerSnapshot, ...]


def total_xp(xp: int | None) -> int:
    """Effective XP contribution of one player (negative and missing count as 0)."""
    return max(0, xp or 0)


def squad_size_for(
    team: TeamSnapshot,
    user_context: UserContext,
    squad_min_length: int = SQUAD_MIN_LENGTH,
) -> int:
    if user_context.team_id is not None and team.id == user_context.team_id:
        return squad_min_length - 1
    return squad_min_length


def select_squad(
    team: TeamSnapshot, user_context: UserContext, size: int,
) -> tuple[PlayerSnapshot, ...]:
    """Starters first, backfilled with the rest of the roster, user excluded."""
    eligible = [
        p for p in team.players
        if user_context.player_id is None or p.id != user_context.player_id
    ]
    starters = [p for p in eligible if p.starter]
    if len(starters) < size:
        bench = [p for p in eligible if not p.starter]
        ordered = starters + bench
    else:
        ordered = starters
    return tuple(ordered[:max(0, size)])


def compute_team_strength(
    team: TeamSnapshot,
    user_context: UserContext | None = None,
    squad_min_length: int = SQUAD_MIN_LENGTH,
) -> TeamStrength:
    """Aggregate a team's squad XP, prestige and tier into one rating."""
    ctx = user_context or UserContext()
    size = squad_size_for(team, ctx, squad_min_length)
    squad = select_squad(team, ctx, size)
    rating = sum(total_xp(p.xp) for p in squad) + (team.prestige or 0) + (team.tier or 0)
    return TeamStrength(rating=rating, squad=squad)
