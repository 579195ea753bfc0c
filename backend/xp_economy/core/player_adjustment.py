"""Player Adjustment: age and ceiling multipliers, weighted rounding, player gate, clamp.

Invariants:
    - Gains use age_gain_multiplier * ceiling_gain_multiplier; losses use age_loss_multiplier
    - weighted_round keeps the expectation of |base| * multiplier
    - The per-player delta is clamped to -PLAYER_DELTA_MAX..PLAYER_DELTA_MAX
    - Player gate passes 70% of gains and 60% of losses, drawn only for nonzero deltas
    - new_xp is always inside XP_MIN..XP_MAX; unchanged players yield no update

Design Decisions:
    - Age tables as ordered (max_age, multiplier) tuples: one lookup helper for both curves
    - Unknown age means a neutral 1.0 multiplier
"""

import math
from dataclasses import dataclass
from typing import Mapping

from xp_economy.core.domain_types import PLAYER_DELTA_MAX, PlayerDelta, PlayerId, Xp
from xp_economy.core.numeric import clamp, clamp_xp, round_half_up
from xp_economy.core.random_source import RandomSource
from xp_economy.core.roster import PlayerXpState

AGE_GAIN_TABLE: tuple[tuple[int, float], ...] = (
    (19, 1.25),
    (24, 1.10),
    (29, 1.00),
    (32, 0.90),
)
AGE_GAIN_VETERAN = 0.75

AGE_LOSS_TABLE: tuple[tuple[int, float], ...] = (
    (19, 0.90),
    (24, 0.95),
    (29, 1.00),
    (32, 1.10),
)
AGE_LOSS_VETERAN = 1.25

CEILING_START_XP = 85
CEILING_SPAN_XP = 15
CEILING_MAX_DAMPENING = 0.6

GAIN_GATE_PCT = 70
LOSS_GATE_PCT = 60


@dataclass(frozen=True)
class PlayerXpUpdate:
    """One committed-to-be XP change."""
    id: PlayerId
    old_xp: Xp
    new_xp: Xp

    @property
    def delta(self) -> PlayerDelta:
        return PlayerDelta(self.new_xp - self.old_xp)


def _lookup_age(age: int | None, table, veteran: float) -> float:
    if age is None:
        return 1.0
    for max_age, mult in table:
        if age <= max_age:
            return mult
    return veteran


def age_gain_multiplier(age: int | None) -> float:
    return _lookup_age(age, AGE_GAIN_TABLE, AGE_GAIN_VETERAN)


def age_loss_multiplier(age: int | None) -> float:
    return _lookup_age(age, AGE_LOSS_TABLE, AGE_LOSS_VETERAN)


def ceiling_gain_multiplier(xp: int) -> float:
    """Dampen gains near the top: 1.0 below 85, down to 0.4 at 100."""
    if xp < CEILING_START_XP:
        return 1.0
    t = clamp((xp - CEILING_START_XP) / CEILING_SPAN_XP, 0, 1)
    return 1.0 - CEILING_MAX_DAMPENING * t


def multiplier_for(base: int, age: int | None, xp: int) -> float:
    if base > 0:
        return age_gain_multiplier(age) * ceiling_gain_multiplier(xp)
    if base < 0:
        return age_loss_multiplier(age)
    return 1.0


def weighted_round(base: int, multiplier: float, rng: RandomSource) -> int:
    """Scale |base|, round the fraction up with probability equal to the fraction."""
    if base == 0:
        return 0
    sign = 1 if base > 0 else -1
    float_mag = abs(base) * multiplier
    whole = math.floor(float_mag)
    frac = float_mag - whole
    if frac > 0 and rng.chance(round_half_up(frac * 100)):
        whole += 1
    return sign * whole


def adjust_player(
    state: PlayerXpState, base: int, rng: RandomSource,
) -> PlayerXpUpdate | None:
    """Final XP change for one player, or None when nothing moves."""
    if base == 0:
        return None

    xp_now = state.xp or 0
    delta = weighted_round(base, multiplier_for(base, state.age, xp_now), rng)
    delta = int(clamp(delta, -PLAYER_DELTA_MAX, PLAYER_DELTA_MAX))

    gate = GAIN_GATE_PCT if base > 0 else LOSS_GATE_PCT
    if delta != 0 and not rng.chance(gate):
        delta = 0
    if delta == 0:
        return None

    new_xp = clamp_xp(xp_now + delta)
    if new_xp == xp_now:
        return None
    return PlayerXpUpdate(id=state.id, old_xp=xp_now, new_xp=new_xp)


def compute_player_updates(
    base_deltas: Mapping[int, int],
    states: Mapping[int, PlayerXpState],
    rng: RandomSource,
) -> list[PlayerXpUpdate]:
    """Run adjust_player for every id with a nonzero base and a loaded state."""
    updates: list[PlayerXpUpdate] = []
    for player_id, base in base_deltas.items():
        state = states.get(player_id)
        if state is None or base == 0:
            continue
        update = adjust_player(state, base, rng)
        if update is not None:
            updates.append(update)
    return updates
