"""
Domain Exceptions and Error Translation
Every error leaves the API as {"success": false, "error": "<message>"}
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sportnet.config import settings

logger = logging.getLogger(__name__)

HTTP_MESSAGES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    408: "Request Timeout",
    409: "Conflict",
    413: "Payload Too Large",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


class AppError(HTTPException):
    """Base domain error carrying an HTTP status and a client-facing message"""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None, headers: Optional[dict] = None):
        code = status_code or self.status_code_default
        super().__init__(
            status_code=code,
            detail=detail or HTTP_MESSAGES.get(code, HTTP_MESSAGES[500]),
            headers=headers,
        )


class BadRequestError(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    status_code_default = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code_default = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code_default = status.HTTP_409_CONFLICT


class UploadTimeoutError(AppError):
    status_code_default = status.HTTP_408_REQUEST_TIMEOUT

    def __init__(self, detail: str = "File upload timeout"):
        super().__init__(detail)


class PayloadTooLargeError(AppError):
    status_code_default = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE

    def __init__(self, detail: str = "File too large"):
        super().__init__(detail)


def format_validation_errors(errors) -> str:
    """Join every field-level message into one string"""
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return ", ".join(messages) or HTTP_MESSAGES[400]


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message}, headers=headers)


def _log_error(request: Request, status_code: int, message: str, exc: Exception):
    logger.error(
        f"{request.method} {request.url.path} - Status: {status_code} - {message}",
        exc_info=status_code >= 500,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the central error translator to the application"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else HTTP_MESSAGES.get(exc.status_code, "Error")
        _log_error(request, exc.status_code, message, exc)
        return error_response(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        _log_error(request, status.HTTP_400_BAD_REQUEST, message, exc)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError):
        message = format_validation_errors(exc.errors())
        _log_error(request, status.HTTP_400_BAD_REQUEST, message, exc)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        _log_error(request, status.HTTP_409_CONFLICT, str(exc.orig), exc)
        return error_response(status.HTTP_409_CONFLICT, "Duplicate field value")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        _log_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")

    @app.exception_handler(JWTError)
    async def token_error_handler(request: Request, exc: JWTError):
        _log_error(request, status.HTTP_401_UNAUTHORIZED, "Invalid token", exc)
        return error_response(status.HTTP_401_UNAUTHORIZED, "Invalid token")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        message = HTTP_MESSAGES[500] if settings.is_production else str(exc) or HTTP_MESSAGES[500]
        _log_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
