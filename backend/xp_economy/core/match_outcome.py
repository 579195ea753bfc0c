"""Match Outcome: result classification and progression eligibility rules.

Invariants:
    - actual_score maps WIN/DRAW/LOSS to 1.0/0.5/0.0
    - result_from_scores: higher score wins; equal scores are a DRAW only when
      allow_draw is True, otherwise InvalidResultError
    - is_progression_exempt is True for any listed match type or tier slug
    - resolve_result prefers an explicit classification over raw scores; neither
      present raises InputIncompleteError

Design Decisions:
    - Raise InvalidResultError here, let the service translate it to a skip:
      classification stays testable without the orchestrator
"""

from typing import Collection

from xp_economy.core.domain_types import ACTUAL_SCORE, MatchResult
from xp_economy.core.errors import InputIncompleteError, InvalidResultError

DEFAULT_EXEMPT_MATCH_TYPES = frozenset({"faceit_pug"})
DEFAULT_EXEMPT_TIER_SLUGS = frozenset({"exhibition:friendly"})


def coerce_result(value: MatchResult | str | None) -> MatchResult:
    """Accept an enum member or its string value (any case)."""
    if isinstance(value, MatchResult):
        return value
    if isinstance(value, str):
        try:
            return MatchResult(value.strip().lower())
        except ValueError:
            pass
    raise InvalidResultError(f"unknown result {value!r}")


def result_from_scores(
    home_score: int | None, away_score: int | None, allow_draw: bool = True,
) -> MatchResult:
    if home_score is None or away_score is None:
        raise InvalidResultError("missing score")
    if home_score > away_score:
        return MatchResult.WIN
    if home_score < away_score:
        return MatchResult.LOSS
    if not allow_draw:
        raise InvalidResultError(f"tied score {home_score}-{away_score} in a no-draw ruleset")
    return MatchResult.DRAW


def resolve_result(
    result: MatchResult | str | None,
    scores: tuple[int | None, int | None] | None = None,
    allow_draw: bool = True,
) -> MatchResult:
    """Explicit classification first, raw score pair as fallback."""
    if result is not None:
        return coerce_result(result)
    if scores is None:
        raise InputIncompleteError("result")
    home_score, away_score = scores
    return result_from_scores(home_score, away_score, allow_draw)


def actual_score(result: MatchResult | str) -> float:
    return ACTUAL_SCORE[coerce_result(result)]


def is_progression_exempt(
    match_type: str | None,
    tier_slug: str | None,
    exempt_match_types: Collection[str] = DEFAULT_EXEMPT_MATCH_TYPES,
    exempt_tier_slugs: Collection[str] = DEFAULT_EXEMPT_TIER_SLUGS,
) -> bool:
    if match_type is not None and match_type in exempt_match_types:
        return True
    if tier_slug is not None and tier_slug in exempt_tier_slugs:
        return True
    return False
