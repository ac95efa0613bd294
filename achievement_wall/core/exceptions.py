"""
Application errors and their HTTP mapping
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"


class AppError(Exception):
    """Base class for errors answered with ``{"error": message}``."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """A required field is missing or blank."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """The referenced achievement does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class UploadTooLargeError(AppError):
    status_code = 413


class StorageFault(AppError):
    """Unexpected persistence failure. The message shown to clients stays generic."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Messages raised from our own field validators
    ctx_error = (first.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StorageFault):
        logger.error(f"Storage fault on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def error_boundary(request: Request, call_next):
    """Last line of defence: turn any unhandled fault into a 500 response."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(error_boundary)
