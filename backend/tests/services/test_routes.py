"""HTTP surface: health checks, match progression and seeding endpoints.

Invariants:
    - Unknown ids return 404 with the structured error envelope
    - Skips come back as 200 with status "skipped" and a reason
    - A processed match is never processed twice through the API
"""

from unittest.mock import AsyncMock, patch

from xp_economy.infrastructure.database import DatabaseSessionManager
from xp_economy.models.match import Match
from xp_economy.models.player_match_stat import PlayerMatchStat
from tests.services.roster_factory import make_free_agent, make_team


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_uses_test_engine(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_reports_unreachable_database(client):
    with patch.object(
        DatabaseSessionManager, "health_check", AsyncMock(return_value=False),
    ):
        res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_progression_unknown_match_404(client):
    res = await client.post("/api/v1/matches/999/progression")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["match_id"] == 999


async def test_progression_applies_then_skips(client, seed_match):
    res = await client.post(
        f"/api/v1/matches/{seed_match.id}/progression", json={"seed": 7},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] in ("applied", "no_change")
    for change in body["updates"]:
        assert change["new_xp"] - change["old_xp"] == change["delta"]
        assert -2 <= change["delta"] <= 2

    again = await client.post(f"/api/v1/matches/{seed_match.id}/progression")
    assert again.json() == {
        "match_id": seed_match.id,
        "status": "skipped",
        "reason": "already_processed",
        "expected_home": None,
        "team_delta": 0,
        "updates": [],
    }


async def test_progression_exempt_match(client, test_db):
    home = await make_team(test_db, "home")
    away = await make_team(test_db, "away")
    match = Match(
        status="completed", tier_slug="exhibition:friendly",
        home_team_id=home.id, away_team_id=away.id, result="loss",
    )
    test_db.add(match)
    await test_db.commit()

    res = await client.post(f"/api/v1/matches/{match.id}/progression")

    assert res.status_code == 200
    assert res.json()["reason"] == "exempt"


async def test_progression_rejects_bad_user_ids(client, seed_match):
    res = await client.post(
        f"/api/v1/matches/{seed_match.id}/progression", json={"user_team_id": 0},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_seed_unknown_player_404(client):
    res = await client.post("/api/v1/players/999/seed-xp")
    assert res.status_code == 404


async def test_seed_xp_endpoint(client, test_db):
    player = await make_free_agent(test_db)
    for _ in range(3):
        match = Match(status="completed", match_type="faceit_pug")
        test_db.add(match)
        await test_db.flush()
        test_db.add(PlayerMatchStat(
            match_id=match.id, player_id=player.id, kills=12, deaths=4,
        ))
    await test_db.commit()

    res = await client.post(f"/api/v1/players/{player.id}/seed-xp", json={"seed": 1})

    assert res.status_code == 200
    body = res.json()
    assert body["seeded"] is True
    assert body["kd"] == 3.0
    assert 30 <= body["xp"] <= 35


async def test_seed_ineligible_player(client, test_db):
    player = await make_free_agent(test_db, xp=40)
    await test_db.commit()

    res = await client.post(f"/api/v1/players/{player.id}/seed-xp")

    assert res.json() == {
        "player_id": player.id, "seeded": False, "xp": 40, "kd": None,
    }
