"""Progression Service: applies one completed match's XP changes end to end.

Invariants:
    - apply_match_outcome never raises for exempt, incomplete or unclassifiable
      matches; it returns a SKIPPED outcome instead
    - Persistence is awaited inside apply_match_outcome, all-or-nothing, and any
      persistence exception propagates to the caller unmodified
    - Only players whose XP actually changes are written
    - Affected players stay locked from load until commit
    - apply_match_outcome has no idempotency guard of its own; a repository that
      raises AlreadyProcessedError turns the call into an ALREADY_PROCESSED skip
    - apply_completed_match binds the repository to Match.xp_processed, claimed
      conditionally inside the write transaction, so concurrent calls for one
      match apply it once

Design Decisions:
    - Impureim sandwich: plan (pure) -> load (IO) -> adjust (pure) -> persist (IO)
    - Repository injected as a Protocol: tests pass in-memory fakes,
      apply_completed_match passes the SQLAlchemy implementation
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from xp_economy.config import Settings, get_settings
from xp_economy.core.domain_types import (
    MatchId, MatchResult, MatchStatus, ProgressionStatus, SkipReason, TeamDelta,
)
from xp_economy.core.errors import (
    AlreadyProcessedError, InputIncompleteError, InvalidResultError,
)
from xp_economy.core.match_outcome import is_progression_exempt, resolve_result
from xp_economy.core.player_adjustment import PlayerXpUpdate, compute_player_updates
from xp_economy.core.progression import plan_match_progression
from xp_economy.core.random_source import RandomSource, SeededRandom
from xp_economy.core.repository_protocols import PlayerXpRepository
from xp_economy.core.roster import PlayerSnapshot, TeamSnapshot, UserContext
from xp_economy.infrastructure.player_repository import SqlAlchemyPlayerXpRepository
from xp_economy.models.match import Match
from xp_economy.models.team import Team
from xp_economy.services.player_locks import PlayerLockRegistry, player_locks

logger = logging.getLogger(__name__)


@dataclass
class ProgressionOutcome:
    """What happened to one match."""
    match_id: MatchId
    status: ProgressionStatus
    reason: SkipReason | None = None
    expected_home: float | None = None
    team_delta: TeamDelta = TeamDelta(0)
    updates: list[PlayerXpUpdate] = field(default_factory=list)


def _skipped(match_id: MatchId, reason: SkipReason) -> ProgressionOutcome:
    logger.info(
        f"Match {match_id} skipped: {reason.value}",
        extra={"match_id": match_id, "reason": reason.value},
    )
    return ProgressionOutcome(match_id, ProgressionStatus.SKIPPED, reason)


async def apply_match_outcome(
    match_id: MatchId,
    home_team: TeamSnapshot | None,
    away_team: TeamSnapshot | None,
    result: MatchResult | str | None,
    user_context: UserContext | None,
    repository: PlayerXpRepository,
    rng: RandomSource | None = None,
    *,
    scores: tuple[int | None, int | None] | None = None,
    allow_draw: bool = True,
    completed: bool = True,
    match_type: str | None = None,
    tier_slug: str | None = None,
    settings: Settings | None = None,
    locks: PlayerLockRegistry | None = None,
) -> ProgressionOutcome:
    """Strength -> probability -> delta -> distribution -> adjustment -> atomic write."""
    settings = settings or get_settings()
    rng = rng or SeededRandom(settings.rng_seed)
    locks = locks or player_locks

    if not completed:
        return _skipped(match_id, SkipReason.NOT_COMPLETED)
    if is_progression_exempt(
        match_type, tier_slug,
        settings.exempt_match_types, settings.exempt_tier_slugs,
    ):
        return _skipped(match_id, SkipReason.EXEMPT)

    try:
        resolved = resolve_result(result, scores, allow_draw)
        plan = plan_match_progression(
            home_team, away_team, resolved, user_context, rng,
            scaling_factor=settings.simulation_scaling_factor,
            squad_min_length=settings.squad_min_length,
        )
    except InputIncompleteError as e:
        logger.debug(e.message, extra={"match_id": match_id})
        return _skipped(match_id, SkipReason.INPUT_INCOMPLETE)
    except InvalidResultError as e:
        logger.warning(e.message, extra={"match_id": match_id, "error_code": e.code})
        return _skipped(match_id, SkipReason.INVALID_RESULT)

    outcome = ProgressionOutcome(
        match_id, ProgressionStatus.NO_CHANGE,
        expected_home=plan.expected_home, team_delta=plan.team_delta,
    )
    if plan.team_delta == 0 or not plan.affected_ids:
        return outcome

    async with locks.hold(plan.affected_ids):
        states = await repository.load_by_ids(plan.affected_ids)
        updates = compute_player_updates(plan.base_deltas, states, rng)
        if not updates:
            return outcome
        try:
            await repository.atomic_bulk_update(updates)
        except AlreadyProcessedError:
            return _skipped(match_id, SkipReason.ALREADY_PROCESSED)
        except Exception:
            logger.error(
                f"XP persistence failed for match {match_id}",
                extra={"match_id": match_id, "updated_players": len(updates)},
                exc_info=True,
            )
            raise

    logger.info(
        f"Applied XP for match {match_id}",
        extra={
            "match_id": match_id,
            "team_delta": plan.team_delta,
            "expected_home": round(plan.expected_home, 4),
            "updated_players": len(updates),
        },
    )
    outcome.status = ProgressionStatus.APPLIED
    outcome.updates = updates
    return outcome


def team_snapshot(team: Team | None) -> TeamSnapshot | None:
    """Freeze an ORM team and its roster for core."""
    if team is None:
        return None
    return TeamSnapshot(
        id=team.id,
        prestige=team.prestige or 0,
        tier=team.tier or 0,
        players=tuple(
            PlayerSnapshot(
                id=p.id, xp=p.xp or 0, age=p.age,
                prestige=p.prestige or 0, starter=bool(p.starter),
            )
            for p in team.players
        ),
    )


async def _load_match(db: AsyncSession, match_id: int) -> Match | None:
    """Match with both rosters loaded; refreshes anything already in the session."""
    query = (
        select(Match)
        .where(Match.id == match_id)
        .options(
            selectinload(Match.home_team).selectinload(Team.players),
            selectinload(Match.away_team).selectinload(Team.players),
        )
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def apply_completed_match(
    db: AsyncSession,
    match_id: MatchId,
    user_context: UserContext | None = None,
    rng: RandomSource | None = None,
    settings: Settings | None = None,
    locks: PlayerLockRegistry | None = None,
) -> ProgressionOutcome:
    """Load a stored match and apply its progression exactly once."""
    match = await _load_match(db, match_id)
    if match is None:
        return _skipped(match_id, SkipReason.NOT_FOUND)
    if match.xp_processed:
        return _skipped(match_id, SkipReason.ALREADY_PROCESSED)

    repository = SqlAlchemyPlayerXpRepository(db, processed_match_id=match.id)
    outcome = await apply_match_outcome(
        match.id,
        team_snapshot(match.home_team),
        team_snapshot(match.away_team),
        match.result,
        user_context,
        repository,
        rng,
        scores=(match.home_score, match.away_score),
        allow_draw=match.allow_draw,
        completed=match.status == MatchStatus.COMPLETED.value,
        match_type=match.match_type,
        tier_slug=match.tier_slug,
        settings=settings,
        locks=locks,
    )
    if outcome.status == ProgressionStatus.NO_CHANGE:
        try:
            await repository.mark_processed()
        except AlreadyProcessedError:
            return _skipped(match.id, SkipReason.ALREADY_PROCESSED)
    return outcome
