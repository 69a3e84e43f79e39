"""Logging setup and per-request access logging."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shop_api.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

logger = logging.getLogger("shop_api.access")


def configure_logging(settings: Settings) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    logging.Formatter.converter = time.gmtime


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request; level follows the status class."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "client": request.client.host if request.client else None,
        }
        message = "%s %s -> %s (%sms)"
        args = (request.method, request.url.path, response.status_code, duration_ms)
        if response.status_code >= 500:
            logger.error(message, *args, extra=extra)
        elif response.status_code >= 400:
            logger.warning(message, *args, extra=extra)
        else:
            logger.info(message, *args, extra=extra)
        return response
