"""ORM Models: SQLAlchemy declarative models for teams, players and matches.

Invariants:
    - All models inherit from Base (db/base.py)
    - Player.xp is the only column the XP economy writes (plus Match.xp_processed)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from xp_economy.models.team import Team  # noqa: F401
from xp_economy.models.player import Player  # noqa: F401
from xp_economy.models.match import Match  # noqa: F401
from xp_economy.models.player_match_stat import PlayerMatchStat  # noqa: F401
