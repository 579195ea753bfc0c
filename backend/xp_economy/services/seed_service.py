"""Seed Service: assigns a new player's initial XP after their qualifying matches.

Invariants:
    - Fires only for a teamless player with exactly seed_match_count completed
      qualifying matches whose xp is still the default
    - KD is aggregated over those qualifying matches only
    - The seeded value is written by a conditional UPDATE (teamless, xp still the
      default) in one commit; a repeat or concurrent call matches no row and
      returns None
    - Checks and write run under the player lock, so one process seeds a
      player at most once even before the database guard applies

Design Decisions:
    - Eligibility and the roll live in core/seed_xp.py; this module only counts,
      aggregates and writes
"""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from xp_economy.config import Settings, get_settings
from xp_economy.core.domain_types import MatchStatus
from xp_economy.core.random_source import RandomSource, SeededRandom
from xp_economy.core.seed_xp import compute_seed_xp, is_seed_eligible, kd_ratio
from xp_economy.models.match import Match
from xp_economy.models.player import Player
from xp_economy.models.player_match_stat import PlayerMatchStat
from xp_economy.services.player_locks import PlayerLockRegistry, player_locks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    player_id: int
    seeded_xp: int
    kd: float


def _qualifying_stats(player_id: int, match_types: list[str]):
    return (
        select(PlayerMatchStat)
        .join(Match, Match.id == PlayerMatchStat.match_id)
        .where(PlayerMatchStat.player_id == player_id)
        .where(Match.status == MatchStatus.COMPLETED.value)
        .where(Match.match_type.in_(match_types))
    )


async def count_qualifying_matches(
    db: AsyncSession, player_id: int, match_types: list[str],
) -> int:
    subq = _qualifying_stats(player_id, match_types).subquery()
    result = await db.execute(select(func.count()).select_from(subq))
    return int(result.scalar_one())


async def early_kd(
    db: AsyncSession, player_id: int, match_types: list[str], limit: int,
) -> float:
    """KD over the player's first `limit` qualifying matches."""
    query = (
        _qualifying_stats(player_id, match_types)
        .order_by(Match.played_at, Match.id)
        .limit(limit)
    )
    result = await db.execute(query)
    kills = deaths = 0
    for stat in result.scalars():
        kills += stat.kills or 0
        deaths += stat.deaths or 0
    return kd_ratio(kills, deaths)


async def _write_seed(db: AsyncSession, player_id: int, xp: int, default_xp: int) -> bool:
    """Set xp only while the row is still teamless at the default value."""
    try:
        result = await db.execute(
            update(Player)
            .where(Player.id == player_id)
            .where(Player.team_id.is_(None))
            .where(Player.xp == default_xp)
            .values(xp=xp)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            await db.rollback()
            return False
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return True


async def seed_player_xp(
    db: AsyncSession,
    player_id: int,
    rng: RandomSource | None = None,
    settings: Settings | None = None,
    locks: PlayerLockRegistry | None = None,
) -> SeedResult | None:
    """Seed XP once; returns None whenever the player is not eligible."""
    settings = settings or get_settings()
    rng = rng or SeededRandom(settings.rng_seed)
    locks = locks or player_locks

    async with locks.hold([player_id]):
        player = await db.get(Player, player_id, populate_existing=True)
        if player is None or player.team_id is not None:
            return None

        played = await count_qualifying_matches(db, player.id, settings.seed_match_types)
        if not is_seed_eligible(
            player.team_id, played, player.xp,
            required_matches=settings.seed_match_count,
            default_xp=settings.default_player_xp,
        ):
            return None

        kd = await early_kd(db, player.id, settings.seed_match_types, settings.seed_match_count)
        xp = compute_seed_xp(kd, rng)

        if not await _write_seed(db, player.id, xp, settings.default_player_xp):
            await db.refresh(player)
            logger.info(
                f"Seed for player {player_id} lost to a concurrent write",
                extra={"player_id": player_id},
            )
            return None
        await db.refresh(player)

    logger.info(
        f"Seeded player {player_id} at {xp} XP (kd={kd:.2f})",
        extra={"player_id": player_id},
    )
    return SeedResult(player_id=player_id, seeded_xp=xp, kd=kd)
