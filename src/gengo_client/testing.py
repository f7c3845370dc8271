from __future__ import annotations

from urllib.parse import parse_qsl

import httpx

from gengo_client import _test_hooks
from gengo_client.json_utils import JSONValue, dump_json_str, load_json_str
from gengo_client.request import DATA_PARAM

# =============================================================================
# Hooks
# =============================================================================


class FakeEnv:
    """In-memory environment installed through ``_test_hooks.get_env``."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def get(self, key: str) -> str | None:
        return self._values.get(key)


def make_fake_env() -> FakeEnv:
    env = FakeEnv()
    _test_hooks.get_env = env.get
    return env


def freeze_time(seconds: float) -> None:
    _test_hooks.unix_time = lambda: seconds


def reset_hooks() -> None:
    """Restore production hook implementations."""
    _test_hooks.get_env = _test_hooks._default_get_env
    _test_hooks.unix_time = _test_hooks._default_unix_time


# =============================================================================
# Fake API server
# =============================================================================


def ok_envelope(payload: JSONValue) -> bytes:
    return dump_json_str({"opstat": "ok", "response": payload}).encode("utf-8")


def error_envelope(code: int | str | None, message: str | None) -> bytes:
    err: dict[str, JSONValue] = {}
    if code is not None:
        err["code"] = code
    if message is not None:
        err["msg"] = message
    return dump_json_str({"opstat": "error", "err": err}).encode("utf-8")


class _Reply:
    __slots__ = ("body", "error", "status")

    def __init__(self, status: int, body: bytes, error: httpx.RequestError | None) -> None:
        self.status = status
        self.body = body
        self.error = error


class FakeGengoServer:
    """Canned responses keyed by (verb, endpoint), served through httpx.MockTransport.

    Every request that reaches the server is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], _Reply] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, method: str, endpoint: str, payload: JSONValue, *, status: int = 200) -> None:
        self._routes[(method, endpoint)] = _Reply(status, ok_envelope(payload), None)

    def reply_raw(self, method: str, endpoint: str, body: bytes, *, status: int = 200) -> None:
        self._routes[(method, endpoint)] = _Reply(status, body, None)

    def fail(self, method: str, endpoint: str, error: httpx.RequestError) -> None:
        self._routes[(method, endpoint)] = _Reply(0, b"", error)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        marker = "/v2/"
        endpoint = path[path.find(marker) + len(marker) :] if marker in path else path
        reply = self._routes.get((request.method, endpoint))
        if reply is None:
            return httpx.Response(404, content=b"")
        if reply.error is not None:
            raise reply.error
        return httpx.Response(reply.status, content=reply.body)

    @property
    def last(self) -> httpx.Request:
        if not self.requests:
            raise AssertionError("no request was sent")
        return self.requests[-1]


def query_fields(request: httpx.Request) -> dict[str, str]:
    return dict(request.url.params.items())


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Decode an application/x-www-form-urlencoded request body."""
    return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))


def form_data(request: httpx.Request) -> JSONValue:
    """The JSON document carried in the form's data field."""
    return load_json_str(form_fields(request)[DATA_PARAM])


__all__ = [
    "FakeEnv",
    "FakeGengoServer",
    "error_envelope",
    "form_data",
    "form_fields",
    "freeze_time",
    "make_fake_env",
    "ok_envelope",
    "query_fields",
    "reset_hooks",
]
