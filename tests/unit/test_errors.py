"""Tests for the ApiError taxonomy and list-failure classification."""

from __future__ import annotations

import json

import pytest

from kubepager.resource.errors import (
    ApiError,
    Disposition,
    ErrorKind,
    ListError,
    Status,
    classify,
    explain_list_error,
    is_bad_request,
    is_not_found,
    is_resource_expired,
    status_error_from_body,
)


class TestErrorKindFromStatus:
    @pytest.mark.parametrize(
        ("reason", "code", "expected"),
        [
            ("Expired", 410, ErrorKind.EXPIRED),
            ("NotFound", 404, ErrorKind.NOT_FOUND),
            ("BadRequest", 400, ErrorKind.BAD_REQUEST),
            ("Forbidden", 403, ErrorKind.FORBIDDEN),
            ("", 404, ErrorKind.NOT_FOUND),
            ("", 400, ErrorKind.BAD_REQUEST),
            ("SomethingNew", 401, ErrorKind.UNAUTHORIZED),
            ("", 502, ErrorKind.UNKNOWN),
        ],
    )
    def test_reason_then_code(self, reason: str, code: int, expected: ErrorKind) -> None:
        assert ErrorKind.from_status(reason, code) is expected

    def test_reason_wins_over_code(self) -> None:
        assert ErrorKind.from_status("NotFound", 400) is ErrorKind.NOT_FOUND

    def test_bare_410_is_not_expired(self) -> None:
        assert ErrorKind.from_status("", 410) is ErrorKind.UNKNOWN


class TestClassify:
    def test_expired(self) -> None:
        err = ApiError(ErrorKind.EXPIRED, "too old")
        assert classify(err) is Disposition.EXPIRED
        assert is_resource_expired(err)

    def test_not_found_and_bad_request_are_selector_mismatch(self) -> None:
        not_found = ApiError(ErrorKind.NOT_FOUND, "missing")
        bad_request = ApiError(ErrorKind.BAD_REQUEST, "bad")
        assert classify(not_found) is Disposition.SELECTOR_MISMATCH
        assert classify(bad_request) is Disposition.SELECTOR_MISMATCH
        assert is_not_found(not_found)
        assert is_bad_request(bad_request)

    @pytest.mark.parametrize("kind", [ErrorKind.FORBIDDEN, ErrorKind.TIMEOUT, ErrorKind.INTERNAL, ErrorKind.UNKNOWN])
    def test_other_api_errors(self, kind: ErrorKind) -> None:
        assert classify(ApiError(kind, "x")) is Disposition.OTHER

    def test_non_api_errors_are_other(self) -> None:
        err = TimeoutError("read timed out")
        assert classify(err) is Disposition.OTHER
        assert not is_resource_expired(err)
        assert not is_not_found(err)
        assert not is_bad_request(err)


class TestExplainListError:
    def test_status_message_rewritten_in_place_with_selector(self) -> None:
        status = Status(code=404, reason="NotFound", message="not found", details={"kind": "pods"})
        err = ApiError.from_status(status)

        result = explain_list_error(err, "pods", "app=foo")

        assert result is err
        assert str(result) == 'unable to find "pods" that match the selector "app=foo": not found'
        assert status.code == 404
        assert status.reason == "NotFound"
        assert status.details == {"kind": "pods"}

    def test_status_message_rewritten_in_place_without_selector(self) -> None:
        err = ApiError.from_status(Status(code=400, reason="BadRequest", message="bad"))

        result = explain_list_error(err, "pods", "")

        assert result is err
        assert str(result) == 'unable to list "pods": bad'

    def test_without_status_returns_list_error(self) -> None:
        err = ApiError(ErrorKind.NOT_FOUND, "no such kind")

        result = explain_list_error(err, "widgets", "")

        assert isinstance(result, ListError)
        assert str(result) == 'unable to list "widgets": no such kind'
        assert str(err) == "no such kind"

    def test_selector_is_quoted(self) -> None:
        err = ApiError(ErrorKind.BAD_REQUEST, "invalid")
        result = explain_list_error(err, "pods", 'app="x"')
        assert 'the selector "app=\\"x\\""' in str(result)

    def test_expired_untouched(self) -> None:
        err = ApiError.from_status(Status(code=410, reason="Expired", message="too old"))
        assert explain_list_error(err, "pods", "app=foo") is err
        assert str(err) == "too old"

    def test_other_untouched(self) -> None:
        err = OSError("network unreachable")
        assert explain_list_error(err, "pods", "app=foo") is err
        assert str(err) == "network unreachable"


class TestStatusErrorFromBody:
    def test_status_body(self) -> None:
        body = json.dumps(
            {
                "kind": "Status",
                "apiVersion": "v1",
                "status": "Failure",
                "message": "The provided continue parameter is too old",
                "reason": "Expired",
                "code": 410,
            }
        ).encode()

        err = status_error_from_body(410, body)

        assert err.kind is ErrorKind.EXPIRED
        assert err.status is not None
        assert err.status.code == 410
        assert str(err) == "The provided continue parameter is too old"

    def test_status_body_without_code_uses_http_code(self) -> None:
        err = status_error_from_body(404, '{"kind": "Status", "message": "gone"}')
        assert err.kind is ErrorKind.NOT_FOUND
        assert err.status is not None
        assert err.status.code == 404

    def test_plain_text_body(self) -> None:
        err = status_error_from_body(400, b"404 page not found\n")
        assert err.kind is ErrorKind.BAD_REQUEST
        assert str(err) == "404 page not found"

    def test_empty_body_uses_fallback(self) -> None:
        err = status_error_from_body(503, b"", fallback="Service Unavailable")
        assert err.kind is ErrorKind.UNKNOWN
        assert str(err) == "Service Unavailable"

    def test_malformed_code_falls_back_to_http_code(self) -> None:
        body = '{"kind": "Status", "reason": "", "code": "x", "message": "broken"}'

        err = status_error_from_body(404, body)

        assert err.kind is ErrorKind.NOT_FOUND
        assert err.status is not None
        assert err.status.code == 404
        assert str(err) == "broken"

    def test_malformed_details_read_as_empty(self) -> None:
        body = '{"kind": "Status", "reason": "BadRequest", "code": 400, "details": ["not", "a", "map"]}'

        err = status_error_from_body(400, body)

        assert err.kind is ErrorKind.BAD_REQUEST
        assert err.status is not None
        assert err.status.details == {}


class TestApiErrorMessage:
    def test_explicit_message_replaces_status_message(self) -> None:
        status = Status(code=404, reason="NotFound", message="server text")

        err = ApiError(ErrorKind.NOT_FOUND, "caller text", status=status)

        assert str(err) == "caller text"
        assert status.message == "caller text"
        assert err.args == ("caller text",)

    def test_rewrite_keeps_args_and_repr_in_step(self) -> None:
        err = ApiError.from_status(Status(code=404, reason="NotFound", message="not found"))

        explain_list_error(err, "pods", "")

        assert err.args == ('unable to list "pods": not found',)
        assert repr(err) == "ApiError(kind='NotFound', message='unable to list \"pods\": not found')"

    def test_without_status_uses_message(self) -> None:
        err = ApiError(ErrorKind.TIMEOUT, "deadline exceeded")
        assert str(err) == "deadline exceeded"
        assert err.args == ("deadline exceeded",)
