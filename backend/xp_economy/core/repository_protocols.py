"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - atomic_bulk_update commits every update or none of them

Design Decisions:
    - Protocol over ABC: structural subtyping, tests hand in small fakes
    - Async in Protocol: implementations do IO, but the pure functions fed by
      these results are never async themselves
"""

from typing import Protocol, Sequence

from xp_economy.core.domain_types import PlayerId
from xp_economy.core.player_adjustment import PlayerXpUpdate
from xp_economy.core.roster import PlayerXpState


class PlayerXpRepository(Protocol):
    """Contract for player XP persistence, implemented by infrastructure."""
    async def load_by_ids(
        self, player_ids: Sequence[PlayerId],
    ) -> dict[PlayerId, PlayerXpState]: ...
    async def atomic_bulk_update(self, updates: Sequence[PlayerXpUpdate]) -> None: ...
