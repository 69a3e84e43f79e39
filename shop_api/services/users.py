"""User business rules: registration, credential checks, profile and admin CRUD."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shop_api.core.errors import AuthenticationError, ConflictError, NotFoundError
from shop_api.core.security import hash_password, verify_password
from shop_api.models import User
from shop_api.schemas.user import UserUpdate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash compared against when the email is unknown, so both login failures cost the same."""
    return hash_password("not-a-real-password")


def create_user(
    db: Session,
    email: str,
    name: str,
    password: str,
    role: str = "user",
) -> User:
    """
    Insert a user with a bcrypt-hashed password.

    The database unique index on email is the source of truth; a violation
    rolls back the session and raises ConflictError.
    """
    user = User(
        email=email.strip().lower(),
        name=name,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration conflict", extra={"reason": "email_taken"})
        raise ConflictError("Email already registered") from e
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; unknown email and wrong password fail identically."""
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if user is None:
        verify_password(password, _dummy_hash())
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    return user


def get_user(db: Session, user_id: int) -> User:
    """Get a user by id. Raises NotFoundError if absent."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def update_user(db: Session, user_id: int, body: UserUpdate) -> User:
    """Apply a partial update (name only). Fields left unset are untouched."""
    user = get_user(db, user_id)
    if body.name is not None:
        user.name = body.name
        db.commit()
        db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user immediately; no soft delete."""
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
