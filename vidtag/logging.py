"""Log formatters and per-request log context."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else on a record came from extra={...}
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
    | {"message", "asctime", "taskName"}
)

_log_context: contextvars.ContextVar[Mapping[str, Any] | None] = contextvars.ContextVar(
    "vidtag_log_context", default=None
)


def bind_log_context(**context: Any) -> contextvars.Token:
    """Bind fields (request_id, path, ...) to every record logged in this context."""
    return _log_context.set({k: v for k, v in context.items() if v not in {None, ""}})


def reset_log_context(token: contextvars.Token) -> None:
    with contextlib.suppress(ValueError):
        _log_context.reset(token)


def current_log_context() -> dict[str, Any]:
    return dict(_log_context.get(None) or {})


class RequestContextFilter(logging.Filter):

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in current_log_context().items():
            setattr(record, key, value)
        return True


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record, extras included as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in extra_fields(record).items():
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            payload[key] = value

        return json.dumps(payload)


class DevFormatter(logging.Formatter):
    """Readable single-line output with extras appended."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{self.formatTime(record, '%Y-%m-%d %H:%M:%S')} "
            f"{record.levelname:8} {record.name} {record.getMessage()}"
        )
        extras = extra_fields(record)
        if extras:
            line += " | " + " ".join(f"{k}={v!r}" for k, v in extras.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
