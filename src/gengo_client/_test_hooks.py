"""Test hooks for gengo_client - allows injecting test dependencies."""

from __future__ import annotations

import os
import time
from collections.abc import Callable


def _default_get_env(key: str) -> str | None:
    """Production implementation - reads from os.environ."""
    return os.getenv(key)


def _default_unix_time() -> float:
    """Production implementation - wall clock seconds since the epoch."""
    return time.time()


# Hook for environment variable access. Tests can override to provide fake values.
get_env: Callable[[str], str | None] = _default_get_env

# Hook for the request timestamp clock. Tests can override to pin signatures.
unix_time: Callable[[], float] = _default_unix_time
