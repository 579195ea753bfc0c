"""Match Progression Route: triggers XP progression for one stored match.

Invariants:
    - Unknown match -> 404 with the standard error envelope
    - Skips (not completed, exempt, already processed, incomplete, invalid result)
      return 200 with status "skipped" and a reason
    - Route contains no progression logic; it delegates to progression_service
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xp_economy.core.domain_types import SkipReason
from xp_economy.core.errors import ErrorContext, ResourceNotFoundError
from xp_economy.core.random_source import SeededRandom
from xp_economy.core.roster import UserContext
from xp_economy.infrastructure.database import get_db
from xp_economy.schemas.progression import (
    PlayerXpChange, ProgressionRequest, ProgressionResponse,
)
from xp_economy.services.progression_service import apply_completed_match

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/matches", tags=["matches"])


@router.post("/{match_id}/progression", response_model=ProgressionResponse)
async def apply_progression(
    match_id: int,
    body: ProgressionRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Apply XP progression for a completed match."""
    body = body or ProgressionRequest()
    rng = SeededRandom(body.seed) if body.seed is not None else None
    outcome = await apply_completed_match(
        db, match_id,
        UserContext(team_id=body.user_team_id, player_id=body.user_player_id),
        rng,
    )
    if outcome.reason == SkipReason.NOT_FOUND:
        raise ResourceNotFoundError(
            "Match", str(match_id), ErrorContext(match_id=match_id),
        )
    return ProgressionResponse(
        match_id=outcome.match_id,
        status=outcome.status,
        reason=outcome.reason,
        expected_home=outcome.expected_home,
        team_delta=outcome.team_delta,
        updates=[
            PlayerXpChange(
                player_id=u.id, old_xp=u.old_xp, new_xp=u.new_xp, delta=u.delta,
            )
            for u in outcome.updates
        ],
    )
