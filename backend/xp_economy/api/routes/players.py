"""Player Seeding Route: one-shot initial XP for new free agents.

Invariants:
    - Unknown player -> 404
    - Ineligible player -> 200 with seeded=false and the unchanged xp
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xp_economy.core.errors import ErrorContext, ResourceNotFoundError
from xp_economy.core.random_source import SeededRandom
from xp_economy.infrastructure.database import get_db
from xp_economy.models.player import Player
from xp_economy.schemas.progression import SeedRequest, SeedResponse
from xp_economy.services.seed_service import seed_player_xp

router = APIRouter(prefix="/api/v1/players", tags=["players"])


@router.post("/{player_id}/seed-xp", response_model=SeedResponse)
async def seed_xp(
    player_id: int,
    body: SeedRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    body = body or SeedRequest()
    player = await db.get(Player, player_id)
    if player is None:
        raise ResourceNotFoundError(
            "Player", str(player_id), ErrorContext(player_id=player_id),
        )
    rng = SeededRandom(body.seed) if body.seed is not None else None
    result = await seed_player_xp(db, player_id, rng)
    if result is None:
        return SeedResponse(player_id=player_id, seeded=False, xp=player.xp)
    return SeedResponse(
        player_id=player_id, seeded=True, xp=result.seeded_xp, kd=result.kd,
    )
