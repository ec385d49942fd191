"""Structured Logging — one JSON line per search event, readable text for local runs.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Search extras (query, provider source, result count, fetch sequence and kind,
      HTTP status) appear as top-level keys only when a call site sets them
    - Non-ASCII queries are written as-is, not \\u-escaped
    - setup_logging is idempotent: a second lifespan start replaces its handler

Design Decisions:
    - Extras are an explicit allow-list so arbitrary LogRecord attributes never leak
    - Providers log their source, so fixture-mode traffic is visible in production logs
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "search", "source", "result_count", "error_code",
    "path", "sequence", "fetch_kind", "status_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


_HANDLER_NAME = "advocate_directory"


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
