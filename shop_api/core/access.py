"""
Access control gate: decides per request whether a bearer token is required,
and whether the token must carry the admin role.

The gate runs as middleware, ahead of routing, so unknown paths and wrong
methods are rejected with 401 like any other protected path. It authenticates
first and authorizes second, so an invalid token never reaches the role check.
"""

import enum
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from shop_api.core.config import Settings
from shop_api.core.errors import AppError, AuthenticationError, AuthorizationError, handle_app_error
from shop_api.core.security import decode_access_token
from shop_api.schemas.auth import CurrentUser

ADMIN_ROLE = "admin"
API_PREFIX = "/api"
ADMIN_PREFIX = API_PREFIX + "/admin"

# Exact-match paths reachable without a token, for any method.
PUBLIC_PATHS = frozenset(
    {
        "/",
        "/api",
        "/api/health",
        "/api/auth/login",
        "/api/users",
        "/api-docs",
        "/api-docs.json",
        "/api-docs/oauth2-redirect",
    }
)

# Exact-match paths that are public only for the listed method.
PUBLIC_METHOD_PATHS = frozenset({("POST", "/api/auth/register")})

# Documents the bearer scheme in OpenAPI; the gate middleware does the checking.
security = HTTPBearer(auto_error=False, description="Token from POST /api/auth/login")


class AccessLevel(str, enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    ADMIN = "admin"


def classify_request(method: str, path: str) -> AccessLevel:
    """Classify a request; anything not explicitly public requires a token."""
    if path in PUBLIC_PATHS or (method.upper(), path) in PUBLIC_METHOD_PATHS:
        return AccessLevel.PUBLIC
    if path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/"):
        return AccessLevel.ADMIN
    return AccessLevel.PROTECTED


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def check_access(
    method: str, path: str, authorization: str | None, settings: Settings
) -> CurrentUser | None:
    """
    Return None for public requests, the verified CurrentUser otherwise.

    Raises AuthenticationError (401) when the token is missing or invalid and
    AuthorizationError (403) when an admin path is called without the admin role.
    """
    level = classify_request(method, path)
    if level is AccessLevel.PUBLIC:
        return None
    token = bearer_token(authorization)
    if token is None:
        raise AuthenticationError()
    current_user = decode_access_token(token, settings)
    if level is AccessLevel.ADMIN and current_user.role != ADMIN_ROLE:
        raise AuthorizationError("Admin access required")
    return current_user


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Apply check_access to every request; the verified identity lands on request.state."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            request.state.current_user = check_access(
                request.method,
                request.url.path,
                request.headers.get("Authorization"),
                request.app.state.settings,
            )
        except AppError as exc:
            return await handle_app_error(request, exc)
        return await call_next(request)


def get_current_user(
    request: Request,
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency for handlers that need the caller's identity."""
    current_user = getattr(request.state, "current_user", None)
    if current_user is None:
        raise AuthenticationError()
    return current_user
