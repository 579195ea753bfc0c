"""Player XP Repository: SQLAlchemy implementation of the PlayerXpRepository port.

Invariants:
    - load_by_ids selects only id, xp, age for the requested ids
    - atomic_bulk_update commits every row (and the bound match's xp_processed
      flag) in one transaction, or rolls everything back and re-raises
    - The flag is claimed with a conditional UPDATE (xp_processed IS false) as
      the first statement; losing that claim rolls back and raises
      AlreadyProcessedError, so a match is applied at most once across workers
    - Other exceptions leave this class unmodified; mapping happens at the API boundary

Design Decisions:
    - Rows locked with SELECT ... FOR UPDATE on backends that support it, so
      two workers touching the same player serialize at the database
    - One UPDATE per player: row counts stay small (at most ten per match)
"""

import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from xp_economy.core.errors import AlreadyProcessedError
from xp_economy.core.player_adjustment import PlayerXpUpdate
from xp_economy.core.roster import PlayerXpState
from xp_economy.models.match import Match
from xp_economy.models.player import Player

logger = logging.getLogger(__name__)


class SqlAlchemyPlayerXpRepository:
    """Reads and writes player XP through one AsyncSession."""

    def __init__(self, db: AsyncSession, processed_match_id: int | None = None):
        self.db = db
        self.processed_match_id = processed_match_id

    async def load_by_ids(self, player_ids: Sequence[int]) -> dict[int, PlayerXpState]:
        if not player_ids:
            return {}
        query = (
            select(Player.id, Player.xp, Player.age)
            .where(Player.id.in_(list(player_ids)))
            .order_by(Player.id)
        )
        if self.db.get_bind().dialect.name != "sqlite":
            query = query.with_for_update()
        result = await self.db.execute(query)
        return {
            row.id: PlayerXpState(id=row.id, xp=row.xp or 0, age=row.age)
            for row in result
        }

    async def atomic_bulk_update(self, updates: Sequence[PlayerXpUpdate]) -> None:
        try:
            await self._claim_match()
            for u in updates:
                await self.db.execute(
                    update(Player).where(Player.id == u.id).values(xp=u.new_xp),
                )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.debug(
            "Committed XP updates",
            extra={"match_id": self.processed_match_id, "updated_players": len(updates)},
        )

    async def mark_processed(self) -> None:
        """Flag the bound match as processed when there was nothing to write."""
        if self.processed_match_id is None:
            return
        try:
            await self._claim_match()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _claim_match(self) -> None:
        """Flip xp_processed false -> true; raise if someone else already did."""
        if self.processed_match_id is None:
            return
        if not await self._flag_match():
            raise AlreadyProcessedError(self.processed_match_id)

    async def _flag_match(self) -> bool:
        result = await self.db.execute(
            update(Match)
            .where(Match.id == self.processed_match_id)
            .where(Match.xp_processed.is_(False))
            .values(xp_processed=True)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1
