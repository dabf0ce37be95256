"""Structured Logging — JSON log lines carrying who, which lesson and which collaborator.

Invariants:
    - Every line has timestamp, level, logger name and message
    - Correlation extras (caller_email, lesson_id, error_code, path, collaborator)
      appear only when a call site supplied them
    - setup_logging is idempotent: a second call replaces, never duplicates, its handler

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Provider SDK and SQLAlchemy engine loggers capped at WARNING: request-level
      INFO lines stay readable
"""

import json
import logging
from datetime import datetime, timezone

CORRELATION_FIELDS = (
    "caller_email", "lesson_id", "error_code", "path", "collaborator",
)

_QUIET_LOGGERS = ("sqlalchemy.engine", "stripe", "urllib3", "google.auth")

_HANDLER_NAME = "lessons_api"


class JSONFormatter(logging.Formatter):
    """One JSON object per record; non-JSON extras (UUID, datetime) stringified."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CORRELATION_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
