"""Squad Distribution: fan-out of a team delta to squad members.

Tests cover:
    - Magnitude 1: exactly min(3, n) members at sign * 1, rest 0
    - Magnitude 2: all at sign * 1, exactly min(2, n) at sign * 2
    - Zero delta and empty squads
    - merge_distributions sums overlapping ids
"""

import pytest

from xp_economy.core.random_source import SeededRandom
from xp_economy.core.roster import PlayerSnapshot
from xp_economy.core.squad_distribution import distribute_to_squad, merge_distributions
from tests.scripted_random import ScriptedRandom


def _squad(n: int, offset: int = 0) -> tuple[PlayerSnapshot, ...]:
    return tuple(PlayerSnapshot(id=offset + i) for i in range(1, n + 1))


@pytest.mark.parametrize("seed", range(15))
@pytest.mark.parametrize("sign", [1, -1])
def test_single_step_moves_three(seed, sign):
    dist = distribute_to_squad(sign, _squad(5), SeededRandom(seed))
    assert len(dist) == 5
    moved = [v for v in dist.values() if v != 0]
    assert len(moved) == 3
    assert all(v == sign for v in moved)


@pytest.mark.parametrize("size", [1, 2, 3])
def test_single_step_small_squad_moves_everyone(size):
    dist = distribute_to_squad(1, _squad(size), SeededRandom(0))
    assert list(dist.values()) == [1] * size


@pytest.mark.parametrize("seed", range(15))
@pytest.mark.parametrize("sign", [1, -1])
def test_double_step_everyone_moves_two_move_twice(seed, sign):
    dist = distribute_to_squad(2 * sign, _squad(5), SeededRandom(seed))
    values = list(dist.values())
    assert all(v in (sign, 2 * sign) for v in values)
    assert values.count(2 * sign) == 2


def test_double_step_single_player():
    assert distribute_to_squad(-2, _squad(1), SeededRandom(0)) == {1: -2}


def test_scripted_picks_are_first_members():
    rng = ScriptedRandom()
    assert distribute_to_squad(2, _squad(5), rng) == {1: 2, 2: 2, 3: 1, 4: 1, 5: 1}
    assert rng.sample_calls == [2]


def test_zero_delta_draws_nothing():
    rng = ScriptedRandom()
    assert distribute_to_squad(0, _squad(5), rng) == {i: 0 for i in range(1, 6)}
    assert rng.sample_calls == []


def test_empty_squad():
    assert distribute_to_squad(1, (), SeededRandom(0)) == {}


def test_merge_sums_by_id():
    merged = merge_distributions({1: 1, 2: 0}, {2: -1, 3: 2}, {1: 1})
    assert merged == {1: 2, 2: -1, 3: 2}


def test_merge_disjoint_sides():
    home = distribute_to_squad(1, _squad(5), ScriptedRandom())
    away = distribute_to_squad(-1, _squad(5, offset=10), ScriptedRandom())
    merged = merge_distributions(home, away)
    assert len(merged) == 10
    assert sum(merged.values()) == 0
