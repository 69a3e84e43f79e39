"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from shop_api import __version__
from shop_api.api import index
from shop_api.api import router as api_router
from shop_api.core.access import API_PREFIX, AccessGateMiddleware
from shop_api.core.config import Settings, get_settings
from shop_api.core.database import SessionLocal, check_db_connected
from shop_api.core.errors import register_exception_handlers
from shop_api.core.headers import SecurityHeadersMiddleware
from shop_api.core.logs import RequestLoggingMiddleware, configure_logging
from shop_api.core.ratelimit import RateLimitMiddleware, build_limiters

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: verify DB connectivity. Schema is managed by Alembic, not created here."""
    db = SessionLocal()
    try:
        if check_db_connected(db):
            logger.info("Startup: database connection OK")
        else:
            logger.warning("Startup: database is not reachable; requests will fail until it is")
    finally:
        db.close()
    yield
    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; every request passes through the access gate, matched route or not."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Shop API",
        version=__version__,
        description="Shop backend: registration, login, own profile, admin user management.",
        docs_url=index.DOCS_URL,
        redoc_url=None,
        openapi_url=index.OPENAPI_URL,
        swagger_ui_oauth2_redirect_url=index.DOCS_URL + "/oauth2-redirect",
        lifespan=lifespan,
    )

    # Middleware and error handlers read app.state; route dependencies go through get_settings.
    app.state.settings = settings
    app.state.api_limiter, app.state.login_limiter = build_limiters(settings)
    app.dependency_overrides[get_settings] = lambda: settings

    register_exception_handlers(app)

    # Last added runs first: logging, CORS, headers, gzip, rate limit, gate.
    app.add_middleware(AccessGateMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1024, compresslevel=6)
    app.add_middleware(SecurityHeadersMiddleware, csp_exempt_prefix=index.DOCS_URL)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(index.root_router, tags=["index"])
    app.include_router(index.router, prefix=API_PREFIX, tags=["index"])
    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()
