from __future__ import annotations

import logging
import sys
import time
from typing import Literal, TypedDict

from gengo_client.json_utils import JSONValue, dump_json_str

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Attributes the request layer attaches through ``extra=``.
REQUEST_FIELDS: tuple[str, ...] = (
    "method",
    "endpoint",
    "status_code",
    "latency_ms",
    "error_kind",
)

_LEVELS: dict[LogLevel, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class RequestLogFields(TypedDict, total=False):
    """Structured fields attached to request log events."""

    method: str
    endpoint: str
    status_code: int
    latency_ms: int
    error_kind: str


def _scalar_fields(record: logging.LogRecord, names: tuple[str, ...]) -> dict[str, JSONValue]:
    """Collect the named record attributes that hold JSON scalars."""
    found: dict[str, JSONValue] = {}
    attrs: dict[str, object] = record.__dict__
    for name in names:
        if name not in attrs:
            continue
        value = attrs[name]
        if isinstance(value, (str, int, float, bool)) or value is None:
            found[name] = value
    return found


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Every line carries timestamp (UTC), level, logger and message, then the
    static fields, then whichever request and extra fields the record has.
    """

    def __init__(self, *, static_fields: dict[str, str], extra_field_names: list[str]) -> None:
        super().__init__()
        self._static = dict(static_fields)
        self._fields = (*REQUEST_FIELDS, *extra_field_names)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, JSONValue] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(self._static)
        for name, value in _scalar_fields(record, self._fields).items():
            payload.setdefault(name, value)
        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dump_json_str(payload)


class TextFormatter(logging.Formatter):
    """``[timestamp] [LEVEL] [logger] key=value ... message``"""

    def __init__(self, *, extra_fields: list[str]) -> None:
        super().__init__()
        self._fields = tuple(extra_fields)

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{self.formatTime(record, '%Y-%m-%d %H:%M:%S')}]",
            f"[{record.levelname}]",
            f"[{record.name}]",
        ]
        parts.extend(f"{k}={v}" for k, v in _scalar_fields(record, self._fields).items())
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat,
    service_name: str,
    extra_fields: list[str] | None,
) -> logging.Logger:
    """Install a single stdout handler on the root logger.

    Existing root handlers are removed. The httpx and httpcore loggers are
    held at WARNING so their per-request lines do not duplicate
    ``gengo_request`` events.

    Example:
        >>> from gengo_client.logging import setup_logging
        >>> root = setup_logging(
        ...     level="DEBUG", format_mode="json", service_name="gengo-client", extra_fields=None
        ... )
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_LEVELS[level])

    extra = list(extra_fields) if extra_fields is not None else []
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    if format_mode == "json":
        handler.setFormatter(
            JsonFormatter(static_fields={"service": service_name}, extra_field_names=extra)
        )
    else:
        handler.setFormatter(TextFormatter(extra_fields=[*REQUEST_FIELDS, *extra]))
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "REQUEST_FIELDS",
    "JsonFormatter",
    "LogFormat",
    "LogLevel",
    "RequestLogFields",
    "TextFormatter",
    "get_logger",
    "setup_logging",
]
