"""Match ORM: a fixture between a home and an away team.

Invariants:
    - result, when set, is home-relative (win/draw/loss)
    - xp_processed flips to True in the same transaction as the XP writes
    - status transitions: locked -> waiting -> ready -> playing -> completed

Design Decisions:
    - Scores and result both stored: result wins when present, scores are the fallback
    - match_type / tier_slug as plain strings, compared against exemption lists from settings
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xp_economy.db.base import Base


class Match(Base):
    """Match entity."""
    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="locked",
    )
    match_type: Mapped[str | None] = mapped_column(String(40), nullable=True)
    tier_slug: Mapped[str | None] = mapped_column(String(60), nullable=True)
    home_team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id"), nullable=True,
    )
    away_team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id"), nullable=True,
    )
    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    result: Mapped[str | None] = mapped_column(String(10), nullable=True)
    allow_draw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    xp_processed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    home_team: Mapped[Optional["Team"]] = relationship(
        "Team", foreign_keys=[home_team_id], lazy="selectin",
    )
    away_team: Mapped[Optional["Team"]] = relationship(
        "Team", foreign_keys=[away_team_id], lazy="selectin",
    )
    stats: Mapped[list["PlayerMatchStat"]] = relationship(
        "PlayerMatchStat", back_populates="match",
        cascade="all, delete-orphan",
    )
