"""Security response headers added to every response."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; style-src 'self' 'unsafe-inline'; "
    "script-src 'self'; img-src 'self' data: https:"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Set the standard hardening headers without overriding ones a route set itself.

    The Swagger UI page loads its assets from a CDN, so paths under `csp_exempt_prefix`
    are served without the Content-Security-Policy header.
    """

    def __init__(self, app, csp_exempt_prefix: str | None = None) -> None:
        super().__init__(app)
        self.csp_exempt_prefix = csp_exempt_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if not (self.csp_exempt_prefix and request.url.path.startswith(self.csp_exempt_prefix)):
            response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
        return response
