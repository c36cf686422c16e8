"""
API errors and the handlers that render them.

Every error response has the same body::

    {"detail": ..., "error_code": ..., "path": ...}

Services raise the ``APIError`` subclasses below. Domain objects raise
plain ``ValueError`` (invalid values, answered with 422) or
``DomainRuleError`` (forbidden actions, answered with 400).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .domain_errors import DomainRuleError

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """HTTP error carrying a machine readable ``error_code``"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )
        self.error_code = error_code or self.default_code


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"
    default_code = "NOT_FOUND"


class ValidationError(APIError):
    status_code = 422
    default_detail = "Validation failed"
    default_code = "VALIDATION_ERROR"


class AuthenticationError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication failed"
    default_code = "AUTH_FAILED"

    def __init__(self, detail: Optional[str] = None, error_code: Optional[str] = None):
        super().__init__(detail, error_code, headers={"WWW-Authenticate": "Bearer"})


class PermissionError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied"
    default_code = "PERMISSION_DENIED"


class ConflictError(APIError):
    """Another record already holds a unique value"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists"
    default_code = "DUPLICATE"


class BusinessRuleError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Business rule violated"
    default_code = "BUSINESS_RULE_VIOLATION"


def error_response(
    request: Request,
    status_code: int,
    detail: Any,
    error_code: Optional[str],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = {"detail": detail, "error_code": error_code, "path": request.url.path}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(request, exc.status_code, exc.detail, exc.error_code, exc.headers)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning(f"Invalid value at {request.url.path}: {exc}")
    return error_response(request, 422, str(exc), "VALIDATION_ERROR")


async def domain_rule_handler(request: Request, exc: DomainRuleError) -> JSONResponse:
    logger.warning(f"Rule violation at {request.url.path}: {exc.message}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, exc.message, exc.error_code)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Constraint violation at {request.url.path}: {exc.orig}")
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, "Database constraint violated", "INTEGRITY_ERROR"
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # pydantic's error list stays under detail
    return error_response(request, 422, exc.errors(), "VALIDATION_ERROR")


def register_exception_handlers(app) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(DomainRuleError, domain_rule_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
