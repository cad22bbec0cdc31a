"""API error taxonomy and list-failure classification.

ApiError       -- Raised by a CollectionClient; tagged with an ErrorKind and
                  optionally carrying the server's structured Status.
classify       -- Pure mapping from an exception to a Disposition.
explain_list_error -- Rewrites selector/not-found messages so they name the
                  resource and selector, keeping the Status payload intact.

Nothing in this module retries. Retry policy, if any, belongs to the
transport.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Category of an API error, named after the server's status reason."""

    EXPIRED = "Expired"
    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    CONFLICT = "Conflict"
    TIMEOUT = "Timeout"
    TOO_MANY_REQUESTS = "TooManyRequests"
    INTERNAL = "InternalError"
    UNKNOWN = ""

    @classmethod
    def from_status(cls, reason: str, code: int = 0) -> ErrorKind:
        """Resolve a kind from a status reason, falling back to the HTTP code.

        The code is consulted only when the reason is empty or unrecognised.
        EXPIRED is never inferred from a code: a bare 410 can also mean the
        resource is simply gone.
        """
        try:
            kind = cls(reason)
        except ValueError:
            kind = cls.UNKNOWN
        if kind is cls.UNKNOWN:
            kind = _KIND_BY_CODE.get(code, cls.UNKNOWN)
        return kind


_KIND_BY_CODE: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    429: ErrorKind.TOO_MANY_REQUESTS,
    500: ErrorKind.INTERNAL,
    504: ErrorKind.TIMEOUT,
}


class Disposition(StrEnum):
    """What a caller of a paginated list should do about a failure."""

    EXPIRED = "expired"
    SELECTOR_MISMATCH = "selector_mismatch"
    OTHER = "other"


_DISPOSITION_BY_KIND: dict[ErrorKind, Disposition] = {
    ErrorKind.EXPIRED: Disposition.EXPIRED,
    ErrorKind.BAD_REQUEST: Disposition.SELECTOR_MISMATCH,
    ErrorKind.NOT_FOUND: Disposition.SELECTOR_MISMATCH,
}


@dataclass
class Status:
    """Structured failure returned by the API server.

    ``message`` is mutable: list failures rewrite it in place so
    that callers matching on ``code``/``reason`` still see the server's values.
    """

    code: int = 0
    reason: str = ""
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Status:
        """Read a Status body; a malformed code reads as 0 and malformed details as {}."""
        try:
            code = int(data.get("code") or 0)
        except (TypeError, ValueError):
            code = 0
        details = data.get("details")
        return cls(
            code=code,
            reason=str(data.get("reason") or ""),
            message=str(data.get("message") or ""),
            details=dict(details) if isinstance(details, dict) else {},
        )


class ApiError(Exception):
    """Error reported by the API server or a CollectionClient.

    With a Status attached, the Status message is the error message: an
    explicit *message* replaces it, and ``set_message`` keeps ``args`` in step.
    """

    def __init__(self, kind: ErrorKind, message: str = "", status: Status | None = None) -> None:
        if status is not None and message:
            status.message = message
        super().__init__(status.message if status is not None else message)
        self.kind = kind
        self.status = status

    def set_message(self, message: str) -> None:
        if self.status is not None:
            self.status.message = message
        self.args = (message,)

    @classmethod
    def from_status(cls, status: Status) -> ApiError:
        return cls(ErrorKind.from_status(status.reason, status.code), status=status)

    def __str__(self) -> str:
        if self.status is not None:
            return self.status.message
        return super().__str__()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={str(self)!r})"


class ListError(Exception):
    """A selector/not-found list failure that carried no structured Status.

    The original exception is chained as ``__cause__``.
    """


def status_error_from_body(code: int, body: bytes | str, fallback: str = "") -> ApiError:
    """Build an ApiError from an HTTP error response.

    A JSON ``Status`` body supplies reason and message; anything else keeps
    the HTTP code and uses the raw text (or *fallback*) as the message.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("kind") == "Status":
        status = Status.from_dict(data)
        if not status.code:
            status.code = code
    else:
        status = Status(code=code, message=text.strip() or fallback)
    return ApiError.from_status(status)


def classify(exc: BaseException) -> Disposition:
    """Map *exc* to a Disposition. Anything that is not an ApiError is OTHER."""
    if not isinstance(exc, ApiError):
        return Disposition.OTHER
    return _DISPOSITION_BY_KIND.get(exc.kind, Disposition.OTHER)


def is_resource_expired(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.kind is ErrorKind.EXPIRED


def is_bad_request(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.kind is ErrorKind.BAD_REQUEST


def is_not_found(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.kind is ErrorKind.NOT_FOUND


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _list_failure_message(resource: str, label_selector: str, original: str) -> str:
    if not label_selector:
        return f"unable to list {_quote(resource)}: {original}"
    return f"unable to find {_quote(resource)} that match the selector {_quote(label_selector)}: {original}"


def explain_list_error(exc: Exception, resource: str, label_selector: str) -> Exception:
    """Return the exception a failed list should surface to the caller.

    Expired and other failures come back untouched. Selector/not-found
    failures get a message naming *resource* and *label_selector*: an
    ApiError with a Status has its message rewritten in place and is returned
    as-is; otherwise a new ListError is returned.
    """
    if classify(exc) is not Disposition.SELECTOR_MISMATCH:
        return exc
    assert isinstance(exc, ApiError)
    if exc.status is not None:
        exc.set_message(_list_failure_message(resource, label_selector, exc.status.message))
        return exc
    return ListError(_list_failure_message(resource, label_selector, str(exc)))
