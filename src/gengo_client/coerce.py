"""Tolerant conversion of loosely-typed JSON scalars.

The API encodes the same field as a number in one response and as a string in
another, booleans as 0/1 (or not at all), and timestamps as epoch seconds.
These helpers never raise: an unusable value becomes None (or False for
booleans).
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime

from gengo_client.json_utils import JSONValue

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def coerce_int(value: JSONValue) -> int | None:
    """Return an int for a number or a strictly numeric string.

    Floats are truncated toward zero. Strings must be an optionally signed run
    of ASCII digits: "1a", "1.0" and "" all yield None.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        if _INT_PATTERN.fullmatch(value) is None:
            return None
        return int(value)
    return None


def coerce_float(value: JSONValue) -> float | None:
    """Return a float for a number or a string.

    Unlike coerce_int, a string that is not a plain decimal number yields 0.0
    rather than None. Credit fields rely on this: a blank amount reads as zero
    credits. Non-finite values never come back.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        if _FLOAT_PATTERN.fullmatch(value) is None:
            return 0.0
        number = float(value)
        return number if math.isfinite(number) else 0.0
    return None


def coerce_date(value: JSONValue) -> datetime | None:
    """Interpret a value as whole seconds since the epoch (UTC)."""
    seconds = coerce_int(value)
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def coerce_bool(value: JSONValue) -> bool:
    """Read a 0/1 style flag: any integer-like value >= 1 is True, anything else False."""
    number = coerce_int(value)
    return number is not None and number >= 1


def bool_to_wire(value: bool) -> int:
    return 1 if value else 0


__all__ = ["bool_to_wire", "coerce_bool", "coerce_date", "coerce_float", "coerce_int"]
