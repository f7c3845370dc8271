from __future__ import annotations

from collections.abc import Mapping, Sequence
from json import JSONDecodeError
from typing import Protocol

JSONValue = dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | None
JSONObject = dict[str, JSONValue]

# Serialization input is broader than JSONValue so TypedDicts and
# dict literals with mixed value types are accepted.
_JSONInputValue = str | int | float | bool | None | Mapping[str, object] | Sequence[object]


class InvalidJsonError(ValueError):
    """Raised when JSON parsing fails."""


class _JsonLoads(Protocol):
    def __call__(self, s: str) -> JSONValue: ...


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: _JSONInputValue,
        *,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
    ) -> str: ...


def dump_json_str(
    value: _JSONInputValue, *, compact: bool = True, indent: int | None = None
) -> str:
    """Serialize to JSON. Compact separators are the default; ``indent`` overrides them."""
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    if indent is not None:
        return dumps(value, separators=None, indent=indent)
    if compact:
        return dumps(value, separators=(",", ":"), indent=None)
    return dumps(value, separators=None, indent=None)


def load_json_str(raw: str) -> JSONValue:
    module = __import__("json")
    loads: _JsonLoads = module.loads
    try:
        value = loads(raw)
    except JSONDecodeError as exc:
        raise InvalidJsonError("Invalid JSON payload") from exc
    if isinstance(value, (dict, list, str, int, float, bool)) or value is None:
        return value
    raise InvalidJsonError("Invalid JSON payload")


def load_json_bytes(raw: bytes) -> JSONValue:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidJsonError("Invalid JSON payload") from exc
    return load_json_str(text)


def as_object(value: JSONValue) -> JSONObject | None:
    """Narrow a JSON value to an object, or None when it has another shape."""
    if isinstance(value, dict):
        return value
    return None


def as_object_list(value: JSONValue) -> list[JSONObject]:
    """Return the object members of a JSON array.

    Non-array values yield an empty list and non-object members are dropped.
    """
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def optional_str(obj: JSONObject, key: str) -> str | None:
    """Extract a string field, or None when missing or of another type."""
    value = obj.get(key)
    if isinstance(value, str):
        return value
    return None


__all__ = [
    "InvalidJsonError",
    "JSONObject",
    "JSONValue",
    "as_object",
    "as_object_list",
    "dump_json_str",
    "load_json_bytes",
    "load_json_str",
    "optional_str",
]
