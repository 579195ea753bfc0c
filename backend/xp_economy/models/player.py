"""Player ORM: the row whose xp column the progression economy writes.

Invariants:
    - xp stays in 0..100 (enforced by core clamping, checked by a DB constraint)
    - team_id NULL means free agent
    - starter marks squad priority for team strength

Design Decisions:
    - CheckConstraint on xp: a bug in the shell cannot persist out-of-range XP
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xp_economy.db.base import Base


class Player(Base):
    """Player entity."""
    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("xp >= 0 AND xp <= 100", name="ck_players_xp_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prestige: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    starter: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id"), nullable=True, index=True,
    )

    team: Mapped[Optional["Team"]] = relationship(
        "Team", back_populates="players",
    )
