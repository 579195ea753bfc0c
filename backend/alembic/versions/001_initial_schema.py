"""Initial schema: teams, players, matches, player_match_stats.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("prestige", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tier", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "players",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("xp", sa.Integer, nullable=False, server_default="0"),
        sa.Column("age", sa.Integer, nullable=True),
        sa.Column("prestige", sa.Integer, nullable=False, server_default="0"),
        sa.Column("starter", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("team_id", sa.Integer, sa.ForeignKey("teams.id"), nullable=True),
        sa.CheckConstraint("xp >= 0 AND xp <= 100", name="ck_players_xp_range"),
    )
    op.create_index("ix_players_team_id", "players", ["team_id"])

    op.create_table(
        "matches",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="locked"),
        sa.Column("match_type", sa.String(40), nullable=True),
        sa.Column("tier_slug", sa.String(60), nullable=True),
        sa.Column("home_team_id", sa.Integer, sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("away_team_id", sa.Integer, sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("home_score", sa.Integer, nullable=True),
        sa.Column("away_score", sa.Integer, nullable=True),
        sa.Column("result", sa.String(10), nullable=True),
        sa.Column("allow_draw", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("xp_processed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "player_match_stats",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("match_id", sa.Integer, sa.ForeignKey("matches.id", ondelete="CASCADE"), nullable=False),
        sa.Column("player_id", sa.Integer, sa.ForeignKey("players.id", ondelete="CASCADE"), nullable=False),
        sa.Column("kills", sa.Integer, nullable=False, server_default="0"),
        sa.Column("deaths", sa.Integer, nullable=False, server_default="0"),
        sa.Column("assists", sa.Integer, nullable=False, server_default="0"),
        sa.UniqueConstraint("match_id", "player_id", name="uq_player_match_stats"),
    )


def downgrade() -> None:
    op.drop_table("player_match_stats")
    op.drop_table("matches")
    op.drop_index("ix_players_team_id", table_name="players")
    op.drop_table("players")
    op.drop_table("teams")
