"""Rating Model: Elo-style expected score between two strength ratings.

Invariants:
    - Result is strictly inside (0, 1) for finite ratings and scaling_factor > 0
    - win_probability(a, b, s) + win_probability(b, a, s) == 1
"""

SIMULATION_SCALING_FACTOR = 200


def win_probability(
    rating_home: float,
    rating_away: float,
    scaling_factor: float = SIMULATION_SCALING_FACTOR,
) -> float:
    """Expected score for the home side."""
    return 1 / (1 + 10 ** ((rating_away - rating_home) / scaling_factor))
