"""
Exception handlers - Domain errors to HTTP responses.

Every handler returns {"detail": <message>}. Request body validation
failures are reported as 400 instead of FastAPI's default 422.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    AccountError,
    DuplicateError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFoundError,
    NotVerifiedError,
    ServerError,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[AccountError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentials: status.HTTP_400_BAD_REQUEST,
    InvalidOrExpiredToken: status.HTTP_400_BAD_REQUEST,
    NotVerifiedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    ServerError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: AccountError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    status_code = status_for(exc)
    headers = None

    if isinstance(exc, Unauthorized):
        # Reason goes to the log only; clients always see the same message
        logger.info("Unauthorized %s %s: %s", request.method, request.url.path, exc.reason.value)
        headers = {"WWW-Authenticate": "Bearer"}
    elif status_code >= 500:
        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc)

    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid input.", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": ServerError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to app."""
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
