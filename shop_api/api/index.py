"""Public discovery routes: GET / and GET /api."""

from fastapi import APIRouter

from shop_api import __version__
from shop_api.schemas.index import ApiIndexResponse, MessageResponse

DOCS_URL = "/api-docs"
OPENAPI_URL = "/api-docs.json"

root_router = APIRouter()
router = APIRouter()


@root_router.get("/", response_model=MessageResponse)
def root() -> MessageResponse:
    """Root route; minimal payload for discovery."""
    return MessageResponse(message="Shop API is running")


@router.get("", response_model=ApiIndexResponse)
def api_index() -> ApiIndexResponse:
    """List the API sections and where the documentation lives."""
    return ApiIndexResponse(
        name="Shop API",
        version=__version__,
        docs=DOCS_URL,
        openapi=OPENAPI_URL,
        sections={
            "health": "/api/health",
            "auth": "/api/auth",
            "users": "/api/users",
            "admin": "/api/admin/users",
        },
    )
