"""Users section: public descriptor and the caller's own profile (/me)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shop_api.core.access import get_current_user
from shop_api.core.database import get_db
from shop_api.schemas.auth import CurrentUser
from shop_api.schemas.errors import ErrorResponse
from shop_api.schemas.index import EndpointInfo, SectionResponse
from shop_api.schemas.user import UserRead, UserUpdate
from shop_api.services import users as user_service

router = APIRouter()

ME_ERRORS = {401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("", response_model=SectionResponse)
def describe_users_section() -> SectionResponse:
    """Describe the user routes and the access each one needs."""
    return SectionResponse(
        section="users",
        description="Profile of the authenticated user",
        endpoints=[
            EndpointInfo(method="GET", path="/api/users/me", access="token", description="Own profile"),
            EndpointInfo(method="PATCH", path="/api/users/me", access="token", description="Update own name"),
            EndpointInfo(method="DELETE", path="/api/users/me", access="token", description="Delete own account"),
        ],
    )


@router.get("/me", response_model=UserRead, responses=ME_ERRORS)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Return the caller's profile. The id comes from the token, never from the request."""
    return UserRead.model_validate(user_service.get_user(db, current_user.id))


@router.patch("/me", response_model=UserRead, responses={400: {"model": ErrorResponse}, **ME_ERRORS})
def update_me(
    body: UserUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Partial update of the caller's profile; only `name` is editable."""
    return UserRead.model_validate(user_service.update_user(db, current_user.id, body))


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ME_ERRORS,
)
def delete_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete the caller's account. Tokens issued before stay signed but resolve to 404."""
    user_service.delete_user(db, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
