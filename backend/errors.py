"""
errors.py - Application error types and their HTTP mapping.
Services raise these; the handlers below turn them into {"error": message} bodies.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HabitTrackerError(Exception):
    """Base exception for all habit tracker errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HabitTrackerError):
    """Raised when a required field is missing or malformed"""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(HabitTrackerError):
    """Raised when credentials or identity cannot be verified"""
    status_code = status.HTTP_401_UNAUTHORIZED


class NoSessionError(AuthError):
    """Raised when nobody has logged in yet"""


class NotFoundError(HabitTrackerError):
    """Raised when a user or habit cannot be found"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(HabitTrackerError):
    """Raised when a uniqueness constraint is violated"""
    status_code = status.HTTP_409_CONFLICT


class UpstreamError(HabitTrackerError):
    """Raised when an external service or the store fails"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


_HTTP_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


async def _app_error_handler(request: Request, exc: HabitTrackerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HabitTrackerError, _app_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
