from __future__ import annotations

from collections.abc import Mapping
from types import ModuleType
from typing import Protocol

FilePart = tuple[str, bytes, str]


class HttpxResponse(Protocol):
    status_code: int
    headers: Mapping[str, str]
    content: bytes


class Timeout(Protocol):
    def __repr__(self) -> str: ...


class _TimeoutCtor(Protocol):
    def __call__(self, timeout: float) -> Timeout: ...


class AsyncTransport(Protocol):
    async def aclose(self) -> None: ...


class HttpxAsyncClient(Protocol):
    async def aclose(self) -> None: ...

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, FilePart] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpxResponse: ...


class _AsyncClientCtor(Protocol):
    def __call__(
        self,
        *,
        timeout: Timeout,
        transport: AsyncTransport | None = None,
    ) -> HttpxAsyncClient: ...


def _load_httpx() -> tuple[_TimeoutCtor, _AsyncClientCtor]:
    mod: ModuleType = __import__("httpx")
    timeout_ctor: _TimeoutCtor = object.__getattribute__(mod, "Timeout")
    async_ctor: _AsyncClientCtor = object.__getattribute__(mod, "AsyncClient")
    return timeout_ctor, async_ctor


def build_async_client(
    timeout_seconds: float, transport: AsyncTransport | None = None
) -> HttpxAsyncClient:
    timeout_ctor, async_ctor = _load_httpx()
    timeout_obj = timeout_ctor(float(timeout_seconds))
    if transport is None:
        return async_ctor(timeout=timeout_obj)
    return async_ctor(timeout=timeout_obj, transport=transport)


__all__ = [
    "AsyncTransport",
    "FilePart",
    "HttpxAsyncClient",
    "HttpxResponse",
    "Timeout",
    "build_async_client",
]
