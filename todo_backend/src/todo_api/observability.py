"""
Structured logging setup for the Todo API.

setup_logging() is called once from the application lifespan. JSON output is the
default; LOG_FORMAT=text switches to a human-readable line format.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("todo_id", "error_code", "path")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

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
        return json.dumps(log, ensure_ascii=False, default=str)


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """
    Install the application's stream handler on the root logger.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.
    """
    global _handler

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _handler = handler
    return handler
