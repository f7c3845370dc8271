from __future__ import annotations

from typing import TypedDict

from ._utils import (
    LogFormat,
    LogLevel,
    _parse_bool,
    _parse_float,
    _parse_log_format,
    _parse_log_level,
    _require_env_str,
)

DEFAULT_TIMEOUT_SECONDS = 30.0


class GengoSettings(TypedDict):
    public_key: str
    private_key: str
    sandbox: bool
    timeout_seconds: float
    log_level: LogLevel
    log_format: LogFormat


def load_gengo_settings() -> GengoSettings:
    timeout = _parse_float("GENGO_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    if timeout <= 0:
        raise ValueError("GENGO_TIMEOUT_SECONDS must be positive")
    return {
        "public_key": _require_env_str("GENGO_PUBLIC_KEY"),
        "private_key": _require_env_str("GENGO_PRIVATE_KEY"),
        "sandbox": _parse_bool("GENGO_SANDBOX", False),
        "timeout_seconds": timeout,
        "log_level": _parse_log_level("GENGO_LOG_LEVEL", "INFO"),
        "log_format": _parse_log_format("GENGO_LOG_FORMAT", "text"),
    }


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "GengoSettings", "load_gengo_settings"]
