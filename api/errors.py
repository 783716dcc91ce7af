"""
Error taxonomy and the JSON error envelope.

Every failure leaves the API as ``{"success": false, "error": ..., ["details": ...]}``
with a stable status code.  Nothing propagates as a crash and no stack
detail reaches the client.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid data"


class ConflictError(AppError):
    """Email already registered (reported as 400, like other bad input)."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentialsError(AppError):
    """Unknown email or wrong password. Both cases look identical."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class AuthorizationError(AppError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing or invalid authorization header"


class NotFoundError(AppError):
    """Record absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Todo not found"


def error_body(message: str, details: Any = None) -> dict:
    body = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Map every exception type onto the error envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(ValidationError.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(AppError.message),
        )
