"""
Structured logging for the workforce reports backend.

Production runs emit one JSON object per line; LOG_FORMAT=text switches to a
plain line for local work. Report and request context passed through
``extra`` (report_id, report_type, request_id, ...) is carried in both.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable

SERVICE_NAME = "workforce-reports"

# Attributes a caller may attach via ``extra``
CONTEXT_FIELDS = ("report_id", "report_type", "request_id", "duration_ms", "function")

QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")

TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s%(context)s"


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """Timestamp is the record's creation time, not the time it was formatted."""

    def format(self, record):
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(record_context(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text line with any report / request context appended as key=value."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def format(self, record):
        context = record_context(record)
        record.context = "".join(f" {key}={value}" for key, value in context.items())
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> logging.Handler:
    """Install a single stdout handler on the root logger and return it."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else ContextTextFormatter())
    root.handlers = [handler]

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
