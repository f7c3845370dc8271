from __future__ import annotations

from enum import Enum

from gengo_client.coerce import coerce_int
from gengo_client.json_utils import InvalidJsonError, JSONObject, load_json_bytes, optional_str


class GengoErrorCode(int, Enum):
    """Known numeric error codes reported in the envelope's ``err.code``."""

    NOT_ENOUGH_CREDITS = 2700


class GengoError(Exception):
    """Base class for every failure a client operation can raise."""

    kind: str = "gengo"


class GengoSystemError(GengoError):
    """The request never produced a response (connection, DNS, TLS, timeout)."""

    kind = "system"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"transport failure: {cause}")
        self.cause = cause


class GengoHttpError(GengoError):
    kind = "http"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = int(status_code)


class GengoApplicationError(GengoError):
    """The API answered with a non-ok ``opstat``.

    Attributes:
        code: Numeric code from ``err.code`` (None when absent or unparseable)
        message: Text from ``err.msg`` (None when absent)
    """

    kind = "application"

    def __init__(self, code: int | None, message: str | None) -> None:
        super().__init__(message if message is not None else f"application error {code}")
        self.code = code
        self.message = message

    @property
    def error_code(self) -> GengoErrorCode | None:
        if self.code is None:
            return None
        try:
            return GengoErrorCode(self.code)
        except ValueError:
            return None


class GengoInvalidDataError(GengoError):
    """The body is not the expected JSON envelope."""

    kind = "invalid_data"

    def __init__(self, data: bytes) -> None:
        super().__init__(f"invalid response body ({len(data)} bytes)")
        self.data = data


class GengoNilDataError(GengoError):
    kind = "nil_data"

    def __init__(self) -> None:
        super().__init__("no response body")


def load_envelope(body: bytes) -> JSONObject | None:
    """Parse a body as an envelope: a JSON object carrying a string ``opstat``."""
    try:
        parsed = load_json_bytes(body)
    except InvalidJsonError:
        return None
    if not isinstance(parsed, dict):
        return None
    if not isinstance(parsed.get("opstat"), str):
        return None
    return parsed


def _application_error(envelope: JSONObject) -> GengoApplicationError:
    code: int | None = None
    message: str | None = None
    err = envelope.get("err")
    if isinstance(err, dict):
        code = coerce_int(err.get("code"))
        message = optional_str(err, "msg")
    return GengoApplicationError(code, message)


def check_response(
    *,
    transport_error: BaseException | None,
    status_code: int | None,
    body: bytes | None,
) -> JSONObject:
    """Return the success envelope of one exchange, or raise its single error.

    First match wins:
    1. transport failure -> GengoSystemError
    2. status outside [200, 300) -> GengoHttpError
    3. envelope with opstat "ok" -> success; other opstat -> GengoApplicationError
    4. body that is not an envelope -> GengoInvalidDataError
    5. no body at all -> GengoNilDataError

    Status is checked before the body, so an HTTP 500 carrying a valid error
    envelope is still a GengoHttpError.
    """
    if transport_error is not None:
        raise GengoSystemError(transport_error) from transport_error

    if status_code is not None and not 200 <= status_code < 300:
        raise GengoHttpError(status_code)

    if body is None:
        raise GengoNilDataError()

    envelope = load_envelope(body)
    if envelope is None:
        raise GengoInvalidDataError(body)
    if envelope.get("opstat") != "ok":
        raise _application_error(envelope)
    return envelope


def classify_response(
    *,
    transport_error: BaseException | None,
    status_code: int | None,
    body: bytes | None,
) -> GengoError | None:
    """The error ``check_response`` would raise for an exchange, or None on success."""
    try:
        check_response(transport_error=transport_error, status_code=status_code, body=body)
    except GengoError as error:
        return error
    return None


__all__ = [
    "GengoApplicationError",
    "GengoError",
    "GengoErrorCode",
    "GengoHttpError",
    "GengoInvalidDataError",
    "GengoNilDataError",
    "GengoSystemError",
    "check_response",
    "classify_response",
    "load_envelope",
]
