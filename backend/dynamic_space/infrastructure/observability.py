"""Structured Logging — JSON log lines on stderr.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Dispatcher context (operation, mode, space_name, error_code, status_code,
      duration_ms, url) is added only when the caller passed it via `extra`
    - Output goes to stderr: stdout carries MCP stdio frames
    - setup_logging() replaces its own handler on repeat calls, never stacks them

Design Decisions:
    - Formatter on stdlib logging, no logging dependency
    - httpx and the mcp SDK are held at WARNING: their per-request INFO lines
      would drown the dispatcher's own records
"""

import json
import logging
import sys
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "operation", "mode", "space_name", "error_code",
    "status_code", "duration_ms", "url",
)

_QUIET_LOGGERS = ("httpx", "httpcore", "mcp")

_HANDLER_NAME = "dynamic_space"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
