"""Admin user management. The access gate enforces the admin role on every /api/admin path."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from shop_api.core.access import get_current_user
from shop_api.core.database import get_db
from shop_api.schemas.auth import CurrentUser
from shop_api.schemas.errors import ErrorResponse
from shop_api.schemas.user import UserRead, UserUpdate
from shop_api.services import users as user_service

logger = logging.getLogger(__name__)
router = APIRouter()

UserId = Annotated[int, Path(gt=0, description="User id")]

ADMIN_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
BY_ID_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **ADMIN_ERRORS}


@router.get("/users", response_model=list[UserRead], responses=ADMIN_ERRORS)
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserRead]:
    """List all users (admin only), ordered by id."""
    return [UserRead.model_validate(u) for u in user_service.list_users(db)]


@router.get("/users/{user_id}", response_model=UserRead, responses=BY_ID_ERRORS)
def get_user(user_id: UserId, db: Annotated[Session, Depends(get_db)]) -> UserRead:
    return UserRead.model_validate(user_service.get_user(db, user_id))


@router.patch("/users/{user_id}", response_model=UserRead, responses=BY_ID_ERRORS)
def update_user(
    user_id: UserId,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Update a user's name by id (admin only)."""
    return UserRead.model_validate(user_service.update_user(db, user_id, body))


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BY_ID_ERRORS,
)
def delete_user(
    user_id: UserId,
    admin: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a user by id (admin only)."""
    user_service.delete_user(db, user_id)
    logger.info("User deleted by admin", extra={"user_id": user_id, "admin_id": admin.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
