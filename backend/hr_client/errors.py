# backend/hr_client/errors.py

from typing import Any, Dict, Optional

import httpx

NETWORK_ERROR = "NETWORK_ERROR"
NOT_FOUND = "NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"
SERVER_ERROR = "SERVER_ERROR"


class ApiError(Exception):
    """Failure talking to the API, classified by ``error_type``."""

    def __init__(
        self,
        error_type: str,
        message: str,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.status = status
        self.details = details or {}

    def __repr__(self) -> str:
        return f"ApiError({self.error_type!r}, {self.message!r}, status={self.status})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        parsed = True
        try:
            body = response.json()
        except ValueError:
            parsed = False
            body = {"detail": response.text}
        if not isinstance(body, dict):
            body = {"detail": body}

        status = response.status_code
        if status == 404:
            return cls(NOT_FOUND, "The requested resource was not found.", status, body)
        if status == 422:
            return cls(VALIDATION_ERROR, "The submitted data is not valid.", status, body)
        if status == 500:
            return cls(SERVER_ERROR, "Internal server error. Please try again later.", status, body)
        detail = body.get("detail")
        # raw bodies (proxy error pages and the like) never become the message
        message = detail if parsed and isinstance(detail, str) else f"Server error: {status}"
        return cls(SERVER_ERROR, message, status, body)

    @classmethod
    def from_exception(cls, exc: Exception) -> "ApiError":
        if isinstance(exc, httpx.TransportError):
            return cls(
                NETWORK_ERROR,
                "Connection error. Check your network connection.",
                details={"original_error": str(exc)},
            )
        return cls(
            SERVER_ERROR,
            "An unexpected error occurred.",
            details={"original_error": str(exc)},
        )


class TokenRefreshError(ApiError):
    """The refresh token was rejected or the refresh call failed."""

    def __init__(self, message: str = "Session expired, please log in again", status: Optional[int] = 401):
        super().__init__(SERVER_ERROR, message, status)
