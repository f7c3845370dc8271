from __future__ import annotations

from gengo_client import _test_hooks
from gengo_client.logging import LogFormat, LogLevel


class _EnvError(RuntimeError):
    pass


def _require_env_str(key: str) -> str:
    value = _test_hooks.get_env(key)
    if value is None:
        raise _EnvError(f"Missing required env var: {key}")
    trimmed = value.strip()
    if trimmed == "":
        raise _EnvError(f"Empty env var: {key}")
    return trimmed


def _optional_env_str(key: str) -> str | None:
    value = _test_hooks.get_env(key)
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed == "":
        return None
    return trimmed


def _parse_float(key: str, default: float) -> float:
    val = _optional_env_str(key)
    if val is None:
        return default
    return float(val)


def _parse_bool(key: str, default: bool) -> bool:
    val = _optional_env_str(key)
    if val is None:
        return default
    normalized = val.lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {key}: {val!r}")


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    val = _optional_env_str(key)
    if val is None:
        return default
    upper_val = val.upper()
    if upper_val == "DEBUG":
        return "DEBUG"
    if upper_val == "INFO":
        return "INFO"
    if upper_val == "WARNING":
        return "WARNING"
    if upper_val == "ERROR":
        return "ERROR"
    if upper_val == "CRITICAL":
        return "CRITICAL"
    return default


def _parse_log_format(key: str, default: LogFormat) -> LogFormat:
    val = _optional_env_str(key)
    if val is None:
        return default
    lowered = val.lower()
    if lowered == "json":
        return "json"
    if lowered == "text":
        return "text"
    raise ValueError(f"Invalid log format for {key}: {val!r}")


__all__ = [
    "LogFormat",
    "LogLevel",
    "_optional_env_str",
    "_parse_bool",
    "_parse_float",
    "_parse_log_format",
    "_parse_log_level",
    "_require_env_str",
]
