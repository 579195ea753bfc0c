"""Structured Logging: JSON lines in production, key=value text in development.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Progression extras (match_id, player_id, team_delta, ...) are emitted only
      when set on the record
    - setup_logging is idempotent: calling it twice leaves one handler
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "match_id", "player_id", "team_delta", "expected_home",
    "updated_players", "reason", "error_code", "path",
)

_HANDLER_NAME = "xp_economy"


def record_extras(record: logging.LogRecord) -> dict:
    """Progression extras present on a record, in EXTRA_FIELDS order."""
    extras = {}
    for key in EXTRA_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            extras[key] = val
    return extras


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the root handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
