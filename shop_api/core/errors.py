"""Domain error taxonomy and the terminal exception handlers that render it as JSON."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shop_api.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or missing token"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    """Missing, invalid or expired bearer token. The message never says which check failed."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = INVALID_TOKEN_MESSAGE) -> None:
        super().__init__(message)

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AppError):
    """Valid token, insufficient role."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Uniqueness violation, e.g. duplicate email."""

    status_code = status.HTTP_409_CONFLICT


class TooManyRequestsError(AppError):
    """Rate limit exceeded; the client may retry after `retry_after` seconds."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after

    @property
    def headers(self) -> dict[str, str] | None:
        return {"Retry-After": str(self.retry_after)}


def _error_body(message: str, details: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


def _log_failure(request: Request, status_code: int, error: str) -> None:
    extra = {
        "method": request.method,
        "path": request.url.path,
        "client": request.client.host if request.client else None,
        "status_code": status_code,
        "error": error[:500],
    }
    if status_code >= 500:
        logger.error("Request failed", extra=extra, exc_info=True)
    else:
        logger.warning("Request rejected", extra=extra)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    _log_failure(request, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=exc.headers,
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "path": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    _log_failure(request, status.HTTP_400_BAD_REQUEST, f"validation: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Validation error", details),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    _log_failure(request, exc.status_code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message),
        headers=getattr(exc, "headers", None),
    )


def _internal_message(request: Request, exc: Exception) -> str:
    settings: Settings = request.app.state.settings
    if settings.APP_ENV == "prod":
        return INTERNAL_ERROR_MESSAGE
    return f"{type(exc).__name__}: {exc}"


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    _log_failure(request, status.HTTP_500_INTERNAL_SERVER_ERROR, f"database: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(_internal_message(request, exc)),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    _log_failure(request, status.HTTP_500_INTERNAL_SERVER_ERROR, repr(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(_internal_message(request, exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Funnel every failure into one JSON shape: {"error": ..., "details"?: [...]}."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
