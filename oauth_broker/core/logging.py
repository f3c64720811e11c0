"""
Logging setup for the broker.

Records emitted while a request is being served are stamped with that
request's id, so a rejected callback can be traced from the access line
to the warning the flow service wrote. Output is either human-readable
text or one JSON object per line.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Set by RequestIDMiddleware for the lifetime of a request
current_request_id: ContextVar[Optional[str]] = ContextVar("current_request_id", default=None)

_STANDARD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}

QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class RequestIDFilter(logging.Filter):
    """Copy the current request id onto records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = current_request_id.get()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; extra fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_FIELDS and value is not None
        )
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text; the request id, when known, trails the message."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        request_id = getattr(record, "request_id", None)
        if request_id:
            return f"{line} [request_id={request_id}]"
        return line


def configure_logging(level: str = "INFO", format_type: str = "text") -> None:
    """
    Install the broker's stdout handler on the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO
        format_type: "json" for structured output, anything else for text
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())
    handler.setFormatter(JSONFormatter() if format_type.lower() == "json" else TextFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
