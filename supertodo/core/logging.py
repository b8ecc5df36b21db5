"""Logging configuration with text and JSON output formats."""

from __future__ import annotations

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import UTC, datetime

from supertodo.core.config import settings

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"
_HANDLER_NAME = "supertodo"


class RequestIdFilter(logging.Filter):
    """Attach the active request id (or `-`) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, *, use_utc: bool = False) -> None:
        super().__init__()
        self._use_utc = use_utc

    def format(self, record: logging.LogRecord) -> str:
        tz = UTC if self._use_utc else None
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_formatter(log_format: str, *, use_utc: bool) -> logging.Formatter:
    if log_format.strip().lower() == "json":
        return JsonFormatter(use_utc=use_utc)
    formatter = logging.Formatter(_TEXT_FORMAT)
    if use_utc:
        formatter.converter = time.gmtime
    return formatter


def configure_logging(
    *,
    level: str | None = None,
    log_format: str | None = None,
    use_utc: bool | None = None,
) -> None:
    """Install the application log handler on the root logger (idempotent)."""
    root = logging.getLogger()
    resolved_level = (level or settings.log_level).upper()
    root.setLevel(resolved_level)

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(
        _build_formatter(
            log_format or settings.log_format,
            use_utc=settings.log_use_utc if use_utc is None else use_utc,
        ),
    )
    root.addHandler(handler)

    # Uvicorn installs its own access log; ours already records each request.
    logging.getLogger("uvicorn.access").disabled = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
