"""Error taxonomy and the exception handlers that turn errors into JSON responses.

Controllers raise the ``AppError`` subclasses below and never build error
bodies themselves. Every error response has the shape::

    {"title": "...", "message": "...", "stackTrace": "..."}

``stackTrace`` is left out when the app runs in production.
"""

import logging
import traceback
from http import HTTPStatus
from typing import Any

from litestar import MediaType, Request, Response
from litestar.exceptions import HTTPException, ValidationException


logger = logging.getLogger(__name__)


TITLES = {
    400: "Validation Failed",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Server Error",
}


class AppError(Exception):
    """Base class for errors that map to a client-facing status code."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Required fields are missing or empty."""

    status_code = 400


class AuthError(AppError):
    """Missing, malformed, invalid or expired credentials."""

    status_code = 401


class AuthzError(AppError):
    """Authenticated, but the resource belongs to someone else."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation, e.g. an email that is already registered."""

    status_code = 400


def title_for(status_code: int) -> str:
    if status_code in TITLES:
        return TITLES[status_code]
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _is_production(request: Request) -> bool:
    config = getattr(request.app.state, "config", None)
    return bool(config and config.app.is_production)


def error_response(
    request: Request, status_code: int, message: str, exc: BaseException
) -> Response[dict[str, Any]]:
    """Build the uniform error body."""
    body: dict[str, Any] = {"title": title_for(status_code), "message": message}
    if not _is_production(request):
        body["stackTrace"] = "".join(traceback.format_exception(exc))
    return Response(content=body, status_code=status_code, media_type=MediaType.JSON)


def app_error_handler(request: Request, exc: AppError) -> Response[dict[str, Any]]:
    return error_response(request, exc.status_code, exc.message, exc)


def validation_exception_handler(
    request: Request, exc: ValidationException
) -> Response[dict[str, Any]]:
    """Request body failed to decode into its typed struct."""
    message = exc.detail
    if isinstance(exc.extra, list) and exc.extra:
        details = [
            item.get("message", "") for item in exc.extra if isinstance(item, dict)
        ]
        if any(details):
            message = f"{exc.detail}: {'; '.join(d for d in details if d)}"
    return error_response(request, 400, message, exc)


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    return error_response(request, exc.status_code, exc.detail, exc)


def internal_error_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    message = "Internal server error" if _is_production(request) else str(exc)
    return error_response(request, 500, message or "Internal server error", exc)


EXCEPTION_HANDLERS = {
    AppError: app_error_handler,
    ValidationException: validation_exception_handler,
    HTTPException: http_exception_handler,
    Exception: internal_error_handler,
}
