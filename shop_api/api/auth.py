"""Registration and login. Both routes are public; login is the only token issuer."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from shop_api.core.config import Settings, get_settings
from shop_api.core.database import get_db
from shop_api.core.errors import AuthenticationError, TooManyRequestsError
from shop_api.core.ratelimit import RateLimiter, client_key
from shop_api.core.security import create_access_token
from shop_api.schemas.auth import LoginRequest, LoginResponse, LoginUser, RegisterRequest
from shop_api.schemas.errors import ErrorResponse
from shop_api.schemas.user import UserRead
from shop_api.services import users as user_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """
    Create an account with role `user`. The password is stored as a bcrypt hash
    and is never returned. A duplicate email yields 409.
    """
    user = user_service.create_user(db, body.email, body.name, body.password)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
def login(
    request: Request,
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>

    Repeated failures from one client IP are answered with 429 until the window passes.
    """
    limiter: RateLimiter | None = request.app.state.login_limiter
    client = client_key(request)
    if limiter is not None:
        retry_after = limiter.retry_after(client)
        if retry_after is not None:
            logger.warning("Login blocked after repeated failures", extra={"client": client})
            raise TooManyRequestsError("Too many failed login attempts, try again later", retry_after)
    try:
        user = user_service.authenticate_user(db, body.email, body.password)
    except AuthenticationError:
        if limiter is not None:
            limiter.record(client)
        raise
    if limiter is not None:
        limiter.reset(client)
    token = create_access_token(user.id, user.email, user.role, settings)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))
