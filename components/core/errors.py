"""Domain errors and their mapping to HTTP responses."""

from typing import Dict

import fastapi
import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for errors raised by the domain layer."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class FormValidationError(AppError):
    """
    Field-level validation failure.

    Carries every failing field so a form can show all messages at once;
    nothing is written when this is raised.
    """

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed")
        self.errors = dict(errors)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content = {"detail": exc.message}
    if isinstance(exc, FormValidationError):
        content["errors"] = exc.errors
    logger.info(
        "request_rejected",
        path=request.url.path,
        status_code=exc.status_code,
        reason=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: fastapi.FastAPI) -> None:
    """Attach domain error handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
