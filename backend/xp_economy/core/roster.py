"""Roster Snapshots: plain, immutable views of teams and players handed to core.

Invariants:
    - Snapshots are read-only; core never mutates a roster
    - Team.players keeps roster order (squad selection depends on it)
    - UserContext with both ids None means "no human user involved"

Design Decisions:
    - Frozen dataclasses instead of ORM objects: core stays free of SQLAlchemy,
      the shell converts rows with from_orm-style helpers in services/
"""

from dataclasses import dataclass, field

from xp_economy.core.domain_types import PlayerId, TeamId


@dataclass(frozen=True)
class PlayerSnapshot:
    """One roster member as seen by team strength and distribution."""
    id: PlayerId
    xp: int = 0
    age: int | None = None
    prestige: int = 0
    starter: bool = False


@dataclass(frozen=True)
class TeamSnapshot:
    """A team with its ordered roster."""
    id: TeamId
    prestige: int = 0
    tier: int = 0
    players: tuple[PlayerSnapshot, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UserContext:
    """The human user's team and personal player, if any."""
    team_id: TeamId | None = None
    player_id: PlayerId | None = None


@dataclass(frozen=True)
class PlayerXpState:
    """Minimal current state loaded for players about to be adjusted."""
    id: PlayerId
    xp: int
    age: int | None = None
