"""Error Hierarchy: typed, categorized exceptions for XP economy failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - InputIncompleteError and InvalidResultError never escape a service call;
      they are turned into a skipped ProgressionOutcome
    - DatabaseError is only raised by the session manager at the API boundary;
      services let persistence exceptions propagate unmodified
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with XpEconomyError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    match_id: int | None = None
    player_id: int | None = None
    debug_info: dict[str, Any] | None = None


class XpEconomyError(Exception):
    """Base exception for all XP economy errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "match_id": self.context.match_id,
                    "player_id": self.context.player_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputIncompleteError(XpEconomyError):
    """Team, squad or roster data missing for a match."""
    def __init__(self, missing: str, context: ErrorContext | None = None):
        super().__init__(
            f"Progression input incomplete: {missing}",
            "INPUT_INCOMPLETE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context, 422,
        )
        self.missing = missing


class InvalidResultError(XpEconomyError):
    """Match result could not be classified as win/draw/loss."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            f"Match result undeterminable: {detail}",
            "INVALID_RESULT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )


class ResourceNotFoundError(XpEconomyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class AlreadyProcessedError(XpEconomyError):
    """Another worker committed this match's XP first."""
    def __init__(self, match_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Match {match_id} XP already applied",
            "ALREADY_PROCESSED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context or ErrorContext(match_id=match_id), 409,
        )
        self.match_id = match_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(XpEconomyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
