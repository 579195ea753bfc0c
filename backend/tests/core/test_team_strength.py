"""Team Strength: squad selection and rating aggregation.

Tests cover:
    - Starters first, backfill in roster order, trimmed to size
    - User's team uses squad_min_length - 1 and never includes the user's player
    - rating = squad XP + prestige + tier
    - Selection is deterministic
"""

from xp_economy.core.roster import PlayerSnapshot, TeamSnapshot, UserContext
from xp_economy.core.team_strength import (
    compute_team_strength, select_squad, squad_size_for, total_xp,
)


def _team(team_id=1, starters=(), count=6, xp=10, prestige=0, tier=0) -> TeamSnapshot:
    players = tuple(
        PlayerSnapshot(id=team_id * 100 + i, xp=xp, starter=(i in starters))
        for i in range(1, count + 1)
    )
    return TeamSnapshot(id=team_id, prestige=prestige, tier=tier, players=players)


def test_total_xp_ignores_missing_and_negative():
    assert total_xp(None) == 0
    assert total_xp(-5) == 0
    assert total_xp(42) == 42


def test_starters_first_then_backfill_in_roster_order():
    team = _team(starters=(2, 4))
    squad = select_squad(team, UserContext(), 5)
    assert [p.id for p in squad] == [102, 104, 101, 103, 105]


def test_only_starters_when_enough():
    team = _team(starters=(1, 2, 3, 4, 5, 6))
    squad = select_squad(team, UserContext(), 5)
    assert [p.id for p in squad] == [101, 102, 103, 104, 105]


def test_short_roster_returns_everyone():
    team = _team(count=3)
    assert len(select_squad(team, UserContext(), 5)) == 3


def test_user_team_squad_is_one_smaller_and_excludes_user():
    team = _team(team_id=1, starters=(1, 2, 3, 4, 5))
    ctx = UserContext(team_id=1, player_id=101)
    assert squad_size_for(team, ctx) == 4
    strength = compute_team_strength(team, ctx)
    ids = [p.id for p in strength.squad]
    assert len(ids) == 4
    assert 101 not in ids


def test_other_team_keeps_full_squad():
    team = _team(team_id=2)
    ctx = UserContext(team_id=1, player_id=101)
    assert squad_size_for(team, ctx) == 5
    assert len(compute_team_strength(team, ctx).squad) == 5


def test_rating_sums_squad_xp_prestige_and_tier():
    team = _team(xp=20, prestige=7, tier=3)
    strength = compute_team_strength(team)
    assert strength.rating == 5 * 20 + 7 + 3


def test_rating_only_counts_squad_members():
    players = (
        PlayerSnapshot(id=1, xp=50, starter=True),
        PlayerSnapshot(id=2, xp=90),
    )
    team = TeamSnapshot(id=9, players=players)
    strength = compute_team_strength(team, squad_min_length=1)
    assert strength.rating == 50


def test_selection_is_deterministic():
    team = _team(starters=(3, 6))
    first = compute_team_strength(team)
    second = compute_team_strength(team)
    assert first == second
