"""Domain Types: identity aliases, bounded value types, and enums for the XP economy.

Invariants:
    - PlayerId, TeamId, MatchId wrap ints; never pass bare ids through domain logic
    - Xp is bounded 0..100 (XP_MIN..XP_MAX)
    - TeamDelta is bounded -2..2, PlayerDelta is bounded -2..2
    - Match results are always relative to the home side

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PlayerId = NewType("PlayerId", int)
TeamId = NewType("TeamId", int)
MatchId = NewType("MatchId", int)


# ─── Value Types ─────────────────────────────────────────────────

Xp = NewType("Xp", int)                   # 0..100
TeamDelta = NewType("TeamDelta", int)     # -2..2
PlayerDelta = NewType("PlayerDelta", int) # -2..2

XP_MIN = 0
XP_MAX = 100
TEAM_DELTA_MAX = 2
PLAYER_DELTA_MAX = 2


# ─── Enums ───────────────────────────────────────────────────────

class MatchResult(str, Enum):
    """Outcome of a match from the home side's point of view."""
    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


class MatchStatus(str, Enum):
    """Match lifecycle states, maps to DB `status` column."""
    LOCKED = "locked"
    WAITING = "waiting"
    READY = "ready"
    PLAYING = "playing"
    COMPLETED = "completed"


class ProgressionStatus(str, Enum):
    """What apply_match_outcome did with a match."""
    APPLIED = "applied"
    NO_CHANGE = "no_change"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why a match produced no progression at all."""
    NOT_FOUND = "not_found"
    NOT_COMPLETED = "not_completed"
    EXEMPT = "exempt"
    ALREADY_PROCESSED = "already_processed"
    INPUT_INCOMPLETE = "input_incomplete"
    INVALID_RESULT = "invalid_result"


# Actual score per result, home-relative
ACTUAL_SCORE: dict[MatchResult, float] = {
    MatchResult.WIN: 1.0,
    MatchResult.DRAW: 0.5,
    MatchResult.LOSS: 0.0,
}
