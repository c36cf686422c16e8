# backend/hr_client/tests/test_errors.py

import httpx
import pytest

from hr_client.errors import (
    NETWORK_ERROR,
    NOT_FOUND,
    SERVER_ERROR,
    VALIDATION_ERROR,
    ApiError,
    TokenRefreshError,
)


@pytest.mark.parametrize(
    "status,error_type",
    [(404, NOT_FOUND), (422, VALIDATION_ERROR), (500, SERVER_ERROR), (400, SERVER_ERROR), (401, SERVER_ERROR)],
)
def test_classification_by_status(status, error_type):
    error = ApiError.from_response(httpx.Response(status, json={"detail": "nope"}))
    assert error.error_type == error_type
    assert error.status == status
    assert error.details == {"detail": "nope"}


def test_other_statuses_use_server_detail():
    response = httpx.Response(400, json={"detail": "Cannot pay a pending payroll", "error_code": "INVALID_STATUS_TRANSITION"})
    error = ApiError.from_response(response)
    assert error.message == "Cannot pay a pending payroll"
    assert error.details["error_code"] == "INVALID_STATUS_TRANSITION"


def test_non_json_body():
    error = ApiError.from_response(httpx.Response(503, text="Service Unavailable"))
    assert error.message == "Server error: 503"
    assert error.details == {"detail": "Service Unavailable"}


def test_html_error_page_is_not_the_message():
    page = "<html><body>Bad Gateway</body></html>"
    error = ApiError.from_response(
        httpx.Response(502, text=page, headers={"Content-Type": "text/html"})
    )
    assert error.message == "Server error: 502"
    assert error.details["detail"] == page


def test_json_detail_is_the_message():
    error = ApiError.from_response(httpx.Response(409, json={"detail": "Email already in use"}))
    assert error.message == "Email already in use"


def test_transport_errors_are_network_errors():
    request = httpx.Request("GET", "http://hr.test/api/employees")
    error = ApiError.from_exception(httpx.ConnectError("connection refused", request=request))
    assert error.error_type == NETWORK_ERROR
    assert error.status is None
    assert "connection refused" in error.details["original_error"]


def test_token_refresh_error_is_an_api_error():
    error = TokenRefreshError()
    assert isinstance(error, ApiError)
    assert error.status == 401
    assert error.message == "Session expired, please log in again"
