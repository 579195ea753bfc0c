"""Team ORM: a club with prestige, tier and an ordered roster.

Invariants:
    - prestige and tier are non-negative integers added straight into team strength
    - players are ordered by id so roster order is stable across loads
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xp_economy.db.base import Base


class Team(Base):
    """Team entity, read-only for the XP economy."""
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    prestige: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tier: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    players: Mapped[list["Player"]] = relationship(
        "Player", back_populates="team", lazy="selectin",
        order_by="Player.id",
    )
