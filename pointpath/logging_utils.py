# logging_utils.py
# Structured JSON logging for PointPath (Loki-friendly)

import json
import logging
import os
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Per-request correlation id (set by the middleware in api.py)
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

SERVICE_NAME = os.getenv("SERVICE_NAME", "pointpath")
ENV = os.getenv("APP_ENV", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# File logging is opt-in; stdout is always on
LOG_FILE = os.getenv("LOG_FILE", "")

# LogRecord attributes; extra fields may not shadow them
_RESERVED_LOG_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


class LokiJSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON.

    Each log line looks like:
        {
            "ts": "...",
            "level": "INFO",
            "logger": "pointpath.api",
            "service": "pointpath",
            "env": "dev",
            "message": "...",
            "request_id": "...",
            ... plus all structured fields ...
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "env": ENV,
            "message": record.getMessage(),
        }

        rid = _request_id.get()
        if rid:
            payload["request_id"] = rid

        for key, value in record.__dict__.items():
            if key.startswith("_"):
                continue
            if key in payload or key in _RESERVED_LOG_FIELDS:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging() -> None:
    """
    Configure root logging once for the whole process.
    Output -> JSON to stdout, plus LOG_FILE when it is set.
    """
    root = logging.getLogger()

    if getattr(root, "_pointpath_configured", False):
        return

    root.setLevel(LOG_LEVEL)

    formatter = LokiJSONFormatter()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if LOG_FILE:
        try:
            log_dir = os.path.dirname(LOG_FILE)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(LOG_FILE)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            # Keep stdout logging only
            root.error(f"Failed to set up file logging: {e}")

    root._pointpath_configured = True  # type: ignore[attr-defined]


def new_request_id() -> str:
    rid = uuid.uuid4().hex
    _request_id.set(rid)
    return rid


def log_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Structured logging helper.

    Fields that collide with LogRecord built-ins are renamed:
        filename -> field_filename
        module   -> field_module
    """
    safe_fields: Dict[str, Any] = {}

    for key, value in fields.items():
        if key in _RESERVED_LOG_FIELDS:
            safe_fields[f"field_{key}"] = value
        else:
            safe_fields[key] = value

    logger.log(level, event, extra={"event": event, **safe_fields})


class PointPathLogger:
    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.timers: Dict[str, float] = {}

    def event(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        log_event(self.logger, event, level=level, **fields)

    def start_timer(self, name: str):
        rid = _request_id.get() or "global"
        self.timers[f"{rid}:{name}"] = time.perf_counter()

    def end_timer(self, name: str) -> float:
        rid = _request_id.get() or "global"
        start = self.timers.pop(f"{rid}:{name}", None)
        if start is None:
            return 0.0
        return time.perf_counter() - start


def get_logger(name: str) -> PointPathLogger:
    return PointPathLogger(name)
