from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Mapping
from typing import Final, Literal

import httpx

from gengo_client import _test_hooks
from gengo_client.errors import GengoError, check_response
from gengo_client.http_client import FilePart, HttpxAsyncClient
from gengo_client.json_utils import JSONValue, dump_json_str
from gengo_client.logging import RequestLogFields, get_logger

PRODUCTION_HOST: Final[str] = "https://api.gengo.com/v2/"
SANDBOX_HOST: Final[str] = "http://api.sandbox.gengo.com/v2/"
API_VERSION: Final[str] = "2"
# Form field carrying the JSON-encoded body of POST and PUT requests.
DATA_PARAM: Final[str] = "data"
USER_AGENT: Final[str] = "gengo-client-python/0.1"

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
QueryValue = str | int

_logger = get_logger(__name__)


def host_for(*, sandbox: bool) -> str:
    return SANDBOX_HOST if sandbox else PRODUCTION_HOST


def sign(private_key: str, timestamp: str) -> str:
    """Hex HMAC-SHA1 of the timestamp, keyed with the private key."""
    digest = hmac.new(private_key.encode("utf-8"), timestamp.encode("utf-8"), hashlib.sha1)
    return digest.hexdigest()


def auth_params(public_key: str, private_key: str) -> dict[str, str]:
    """Parameters attached to every request regardless of verb."""
    timestamp = str(int(_test_hooks.unix_time()))
    return {
        "api_key": public_key,
        "api_sig": sign(private_key, timestamp),
        "ts": timestamp,
        "version": API_VERSION,
    }


class ApiRequest:
    """One API call before signing: verb, endpoint, and its parameters."""

    __slots__ = ("body", "endpoint", "files", "method", "query")

    def __init__(
        self,
        method: HttpMethod,
        endpoint: str,
        *,
        query: Mapping[str, QueryValue] | None = None,
        body: Mapping[str, JSONValue] | None = None,
        files: Mapping[str, FilePart] | None = None,
    ) -> None:
        if files and method != "POST":
            raise ValueError("file parts are only sent with POST")
        self.method: HttpMethod = method
        self.endpoint = endpoint
        self.query: dict[str, QueryValue] = dict(query or {})
        self.body: dict[str, JSONValue] | None = dict(body) if body is not None else None
        self.files: dict[str, FilePart] = dict(files or {})


class PreparedCall:
    """A signed request ready to hand to the HTTP client."""

    __slots__ = ("data", "files", "method", "params", "url")

    def __init__(
        self,
        *,
        method: HttpMethod,
        url: str,
        params: dict[str, str] | None,
        data: dict[str, str] | None,
        files: dict[str, FilePart] | None,
    ) -> None:
        self.method = method
        self.url = url
        self.params = params
        self.data = data
        self.files = files


def prepare(request: ApiRequest, *, host: str, public_key: str, private_key: str) -> PreparedCall:
    """Sign a request and place its parameters for the verb.

    GET and DELETE carry everything in the query string. POST and PUT send a
    single ``data`` form field holding the JSON-encoded body with the signing
    fields folded in; with file parts that field goes out as multipart.
    """
    url = host + request.endpoint
    fixed = auth_params(public_key, private_key)

    if request.method in ("GET", "DELETE"):
        params = dict(fixed)
        for key, value in request.query.items():
            params[key] = str(value)
        return PreparedCall(method=request.method, url=url, params=params, data=None, files=None)

    folded: dict[str, JSONValue] = dict(request.body or {})
    folded.update(fixed)
    form = {DATA_PARAM: dump_json_str(folded)}
    files = request.files if request.files else None
    return PreparedCall(method=request.method, url=url, params=None, data=form, files=files)


class Envelope:
    """A successful response: the operation payload plus the raw body."""

    __slots__ = ("payload", "raw")

    def __init__(self, payload: JSONValue, raw: bytes) -> None:
        self.payload = payload
        self.raw = raw


class GengoTransport:
    """Signs, sends and classifies requests against one API host."""

    def __init__(
        self,
        *,
        host: str,
        public_key: str,
        private_key: str,
        client: HttpxAsyncClient,
    ) -> None:
        self._host = host
        self._public_key = public_key
        self._private_key = private_key
        self._client = client

    @property
    def host(self) -> str:
        return self._host

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: ApiRequest) -> Envelope:
        """Issue the request once and return its payload, or raise the classified error."""
        call = prepare(
            request,
            host=self._host,
            public_key=self._public_key,
            private_key=self._private_key,
        )
        transport_error: httpx.RequestError | None = None
        status_code: int | None = None
        body: bytes | None = None
        started = time.perf_counter()
        try:
            response = await self._client.request(
                call.method,
                call.url,
                params=call.params,
                data=call.data,
                files=call.files,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            )
        except httpx.RequestError as exc:
            transport_error = exc
        else:
            status_code = int(response.status_code)
            body = bytes(response.content)
        latency_ms = int((time.perf_counter() - started) * 1000)

        fields: RequestLogFields = {
            "method": call.method,
            "endpoint": request.endpoint,
            "latency_ms": latency_ms,
        }
        if status_code is not None:
            fields["status_code"] = status_code
        _logger.debug("gengo_request", extra=dict(fields))

        try:
            envelope = check_response(
                transport_error=transport_error, status_code=status_code, body=body
            )
        except GengoError as error:
            _logger.info(
                "gengo_error",
                extra={"error_kind": error.kind, "endpoint": request.endpoint},
            )
            raise

        payload = envelope["response"] if "response" in envelope else envelope
        return Envelope(payload, body or b"")


__all__ = [
    "API_VERSION",
    "DATA_PARAM",
    "PRODUCTION_HOST",
    "SANDBOX_HOST",
    "USER_AGENT",
    "ApiRequest",
    "Envelope",
    "GengoTransport",
    "HttpMethod",
    "PreparedCall",
    "QueryValue",
    "auth_params",
    "host_for",
    "prepare",
    "sign",
]
