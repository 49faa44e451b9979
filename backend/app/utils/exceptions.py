"""Domain exceptions and their mapping to HTTP error responses.

Every error body produced by the API has the shape ``{"message": ...}`` where
the message is either a single string or an ordered list of strings.
"""
from typing import List, Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.logger import get_logger

logger = get_logger("errors")

ACCESS_DENIED = "Access Denied"
EMAIL_IN_USE = "email address already in use"
UNEXPECTED_ERROR = "Unexpected error"

Message = Union[str, List[str]]


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Message):
        super().__init__(message)
        self.message = message


class AuthenticationError(AppException):
    """Raised when credentials are missing or do not match an account.

    The message is always the same so callers cannot tell an unknown account
    from a wrong password.
    """

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__(ACCESS_DENIED)


class ValidationError(AppException):
    """Raised when one or more field constraints are violated."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, messages: List[str]):
        super().__init__(list(messages))
        self.messages = list(messages)


class UniqueConstraintError(AppException):
    """Raised when an insert collides with a unique column."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = EMAIL_IN_USE):
        super().__init__(message)


class NotFoundError(AppException):
    """Raised when a resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str):
        super().__init__(f"{resource} Not Found")
        self.resource = resource


def error_response(status_code: int, message: Message) -> JSONResponse:
    """Build the uniform error body."""
    return JSONResponse(status_code=status_code, content={"message": message})


def to_error_response(error: AppException) -> JSONResponse:
    """Convert a domain exception to its HTTP response."""
    return error_response(error.status_code, error.message)


def handle_database_error(error: Exception, operation: str) -> HTTPException:
    """
    Convert an unexpected persistence or runtime error to a 500.

    The original error text is left to the caller's log and never returned,
    since database errors can carry bound parameters such as password digests.

    Args:
        error: The unexpected error
        operation: Description of the operation that failed

    Returns:
        HTTPException with 500 status
    """
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Unexpected error during {operation}",
    )


def _format_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return to_error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, exc.detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and path parameters are reported like field violations
    messages = [_format_request_error(error) for error in exc.errors()]
    return error_response(status.HTTP_400_BAD_REQUEST, messages)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Failures outside a route body, e.g. in the authentication dependency
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render every error as ``{"message": ...}``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
