"""SQLAlchemy Player XP Repository: loads, atomic writes and the processed flag."""

import pytest
from sqlalchemy import select

from xp_economy.core.player_adjustment import PlayerXpUpdate
from xp_economy.infrastructure.player_repository import SqlAlchemyPlayerXpRepository
from xp_economy.models.match import Match
from xp_economy.models.player import Player
from tests.services.roster_factory import make_team


async def test_load_by_ids_returns_requested_rows(test_db):
    await make_team(test_db, "home", size=3, xp=40, age=22)
    await test_db.commit()
    repo = SqlAlchemyPlayerXpRepository(test_db)

    states = await repo.load_by_ids([1, 3, 99])

    assert sorted(states) == [1, 3]
    assert states[1].xp == 40
    assert states[3].age == 22


async def test_load_by_ids_empty(test_db):
    assert await SqlAlchemyPlayerXpRepository(test_db).load_by_ids([]) == {}


async def test_bulk_update_commits_rows_and_flag(test_db, test_session_factory, seed_match):
    repo = SqlAlchemyPlayerXpRepository(test_db, processed_match_id=seed_match.id)

    await repo.atomic_bulk_update([
        PlayerXpUpdate(id=1, old_xp=50, new_xp=52),
        PlayerXpUpdate(id=6, old_xp=50, new_xp=49),
    ])

    async with test_session_factory() as fresh:
        rows = await fresh.execute(
            select(Player.id, Player.xp).where(Player.id.in_([1, 2, 6])).order_by(Player.id),
        )
        assert [tuple(r) for r in rows] == [(1, 52), (2, 50), (6, 49)]
        flag = await fresh.execute(
            select(Match.xp_processed).where(Match.id == seed_match.id),
        )
        assert flag.scalar_one() is True


async def test_out_of_range_xp_rolls_back_whole_batch(test_db, test_session_factory, seed_match):
    repo = SqlAlchemyPlayerXpRepository(test_db, processed_match_id=seed_match.id)

    with pytest.raises(Exception):
        await repo.atomic_bulk_update([
            PlayerXpUpdate(id=1, old_xp=50, new_xp=51),
            PlayerXpUpdate(id=2, old_xp=50, new_xp=101),
        ])

    async with test_session_factory() as fresh:
        rows = await fresh.execute(select(Player.xp).where(Player.id.in_([1, 2])))
        assert set(rows.scalars()) == {50}


async def test_mark_processed_without_match_is_noop(test_db):
    await SqlAlchemyPlayerXpRepository(test_db).mark_processed()
