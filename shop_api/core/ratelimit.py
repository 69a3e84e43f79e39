"""In-process sliding-window rate limits keyed by client IP."""

import logging
import time
from threading import Lock

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shop_api.core.config import Settings
from shop_api.core.errors import TooManyRequestsError, handle_app_error

logger = logging.getLogger(__name__)

API_WINDOW_SECONDS = 60


class RateLimiter:
    """Allow at most `max_attempts` recorded attempts per key within `window_seconds`."""

    def __init__(self, max_attempts: int, window_seconds: int) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._attempts: dict[str, list[float]] = {}
        self._lock = Lock()

    def _prune(self, key: str, now: float) -> list[float]:
        cutoff = now - self.window_seconds
        attempts = [t for t in self._attempts.get(key, []) if t > cutoff]
        if attempts:
            self._attempts[key] = attempts
        else:
            self._attempts.pop(key, None)
        return attempts

    def _wait(self, attempts: list[float], now: float) -> int:
        return max(1, int(attempts[0] + self.window_seconds - now) + 1)

    def retry_after(self, key: str) -> int | None:
        """Seconds until `key` may try again, or None when it is under the limit."""
        with self._lock:
            now = time.monotonic()
            attempts = self._prune(key, now)
            if len(attempts) < self.max_attempts:
                return None
            return self._wait(attempts, now)

    def record(self, key: str) -> None:
        with self._lock:
            self._attempts.setdefault(key, []).append(time.monotonic())

    def hit(self, key: str) -> int | None:
        """Check and record in one step; returns retry-after seconds when over the limit."""
        with self._lock:
            now = time.monotonic()
            attempts = self._prune(key, now)
            if len(attempts) >= self.max_attempts:
                return self._wait(attempts, now)
            self._attempts.setdefault(key, []).append(now)
            return None

    def reset(self, key: str) -> None:
        with self._lock:
            self._attempts.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()


def build_limiters(settings: Settings) -> tuple[RateLimiter | None, RateLimiter | None]:
    """Return (api_limiter, login_limiter); both None when rate limiting is disabled."""
    if not settings.RATE_LIMIT_ENABLED:
        return None, None
    return (
        RateLimiter(settings.RATE_LIMIT_PER_MINUTE, API_WINDOW_SECONDS),
        RateLimiter(settings.LOGIN_MAX_FAILURES, settings.LOGIN_FAILURE_WINDOW_SECONDS),
    )


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject a client with 429 once it exceeds the per-minute request budget."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: RateLimiter | None = request.app.state.api_limiter
        if limiter is not None:
            retry_after = limiter.hit(client_key(request))
            if retry_after is not None:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"client": client_key(request), "path": request.url.path},
                )
                return await handle_app_error(
                    request,
                    TooManyRequestsError("Too many requests, try again later", retry_after),
                )
        return await call_next(request)
