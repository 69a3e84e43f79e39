"""Pydantic request/response schemas."""

from shop_api.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LoginUser,
    RegisterRequest,
    Role,
)
from shop_api.schemas.errors import ErrorDetail, ErrorResponse
from shop_api.schemas.health import HealthResponse
from shop_api.schemas.index import ApiIndexResponse, EndpointInfo, MessageResponse, SectionResponse
from shop_api.schemas.user import UserRead, UserUpdate

__all__ = [
    "ApiIndexResponse",
    "CurrentUser",
    "EndpointInfo",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MessageResponse",
    "RegisterRequest",
    "Role",
    "SectionResponse",
    "UserRead",
    "UserUpdate",
]
