"""Application Configuration: progression and seeding knobs read from the environment.

Invariants:
    - Every knob has a default matching what core/ uses when called without settings
    - Out-of-range knobs (non-positive scaling factor, empty squads, seed xp
      outside 0..100) fail at startup with a ValidationError
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - The database URL is the only deployment secret; it defaults to the
      docker-compose Postgres service
    - Match types and tier slugs are plain lists so operators can extend the
      exempt and seeding sets without a code change
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """XP economy settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage for players, teams, matches and their XP
    database_url: str = "postgresql+asyncpg://xp:xp@db:5432/xp"
    database_pool_size: int = Field(default=20, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Point bare postgresql:// URLs at asyncpg, the driver the session manager runs on."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Progression
    simulation_scaling_factor: float = Field(default=200, gt=0)
    squad_min_length: int = Field(default=5, ge=1)
    exempt_match_types: list[str] = ["faceit_pug"]
    exempt_tier_slugs: list[str] = ["exhibition:friendly"]

    # Seeding
    seed_match_types: list[str] = ["faceit_pug"]
    seed_match_count: int = Field(default=3, ge=1)
    default_player_xp: int = Field(default=0, ge=0, le=100)

    # None draws a fresh seed per invocation
    rng_seed: int | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
