"""Translation of calendar errors into HTTP error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from core.errors import (
    CalendarError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_status(exc: Exception) -> tuple[int, str]:
    """Map an exception to (HTTP status code, error code)."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST, ErrorCodes.VALIDATION_ERROR
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND, ErrorCodes.NOT_FOUND
    if isinstance(exc, StoreUnavailableError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCodes.STORE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCodes.INTERNAL_ERROR


def error_response(status_code: int, error: str, code: str, details: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, code=code, details=details or []).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers producing the standard error format."""

    @app.exception_handler(CalendarError)
    async def calendar_error_handler(request: Request, exc: CalendarError):
        status_code, code = error_status(exc)
        return error_response(status_code, str(exc), code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request",
            ErrorCodes.INVALID_REQUEST,
            details,
        )

    # Global exception handler for unexpected errors
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            ErrorCodes.INTERNAL_ERROR,
        )
