"""Progression Schemas: pydantic models for the match progression and seeding endpoints.

Invariants:
    - Ids are positive integers
    - seed, when given, makes the request's random draws reproducible
"""

from pydantic import BaseModel, Field

from xp_economy.core.domain_types import ProgressionStatus, SkipReason


class ProgressionRequest(BaseModel):
    """Who the human user is, for squad-size accounting."""
    user_team_id: int | None = Field(None, ge=1)
    user_player_id: int | None = Field(None, ge=1)
    seed: int | None = None


class PlayerXpChange(BaseModel):
    player_id: int
    old_xp: int = Field(ge=0, le=100)
    new_xp: int = Field(ge=0, le=100)
    delta: int = Field(ge=-2, le=2)


class ProgressionResponse(BaseModel):
    match_id: int
    status: ProgressionStatus
    reason: SkipReason | None = None
    expected_home: float | None = None
    team_delta: int = 0
    updates: list[PlayerXpChange] = []


class SeedRequest(BaseModel):
    seed: int | None = None


class SeedResponse(BaseModel):
    player_id: int
    seeded: bool
    xp: int = Field(ge=0, le=100)
    kd: float | None = None
