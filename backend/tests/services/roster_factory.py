"""Roster builders for DB-backed service tests."""

from xp_economy.models.player import Player
from xp_economy.models.team import Team


async def make_team(db, name, size=5, xp=50, age=27):
    """Team with `size` starters; players get ascending ids in insert order."""
    team = Team(name=name)
    db.add(team)
    await db.flush()
    for i in range(size):
        db.add(Player(
            name=f"{name}-{i}", xp=xp, age=age, starter=True, team_id=team.id,
        ))
    await db.flush()
    return team


async def make_free_agent(db, name="rookie", xp=0):
    player = Player(name=name, xp=xp, age=19)
    db.add(player)
    await db.flush()
    return player
