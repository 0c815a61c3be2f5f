# core/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """Base for errors that map to a client-facing ``{"message": ...}`` body."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class ConflictError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class NotFoundError(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class AuthenticationError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class StoreError(AccountError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


def require_fields(payload, fields: list[str]) -> None:
    """Raise ``ValidationError`` naming every field that is absent or blank."""
    missing = []
    for field in fields:
        value = getattr(payload, field, None)
        if value is None or not str(value).strip():
            missing.append(field)
    if missing:
        raise ValidationError(f"Please provide all the required fields: {', '.join(missing)}")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountError)
    async def account_error_handler(request: Request, exc: AccountError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed body on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": StoreError.message},
        )
