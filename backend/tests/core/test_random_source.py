"""Random Source: SeededRandom reproducibility and edge behavior.

Tests cover:
    - Same seed replays the same draws
    - chance() clamps and short-circuits at 0 and 100
    - randint() is inclusive and collapses empty ranges
    - sample() draws distinct items, never more than available
"""

from xp_economy.core.random_source import SeededRandom


def test_same_seed_replays_same_sequence():
    a, b = SeededRandom(42), SeededRandom(42)
    assert [a.uniform() for _ in range(10)] == [b.uniform() for _ in range(10)]
    assert a.sample(range(20), 5) == b.sample(range(20), 5)


def test_uniform_in_unit_interval():
    rng = SeededRandom(1)
    for _ in range(500):
        assert 0.0 <= rng.uniform() < 1.0


def test_chance_extremes():
    rng = SeededRandom(3)
    assert all(not rng.chance(0) for _ in range(100))
    assert all(rng.chance(100) for _ in range(100))
    assert all(rng.chance(150) for _ in range(100))
    assert all(not rng.chance(-5) for _ in range(100))


def test_chance_roughly_matches_percent():
    rng = SeededRandom(7)
    hits = sum(rng.chance(30) for _ in range(5000))
    assert 1300 < hits < 1700


def test_randint_inclusive_bounds():
    rng = SeededRandom(5)
    seen = {rng.randint(20, 30) for _ in range(2000)}
    assert seen == set(range(20, 31))


def test_randint_collapses_empty_range():
    rng = SeededRandom(5)
    assert rng.randint(10, 10) == 10
    assert rng.randint(12, 4) == 12


def test_sample_distinct_and_bounded():
    rng = SeededRandom(9)
    for n in range(0, 8):
        picked = rng.sample(["a", "b", "c", "d", "e"], n)
        assert len(picked) == min(n, 5)
        assert len(set(picked)) == len(picked)


def test_sample_does_not_mutate_input():
    items = [1, 2, 3]
    SeededRandom(0).sample(items, 3)
    assert items == [1, 2, 3]
