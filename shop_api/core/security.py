"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from shop_api.core.config import Settings
from shop_api.core.errors import AuthenticationError
from shop_api.schemas.auth import PASSWORD_MAX_BYTES, CurrentUser

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Single symmetric scheme; tokens signed with anything else are rejected.
JWT_ALGORITHM = "HS256"

REQUIRED_CLAIMS = ["sub", "email", "role", "aud", "iss", "exp"]


def password_too_long(plain_password: str) -> bool:
    """True when bcrypt would silently ignore part of the password."""
    return len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if password_too_long(plain_password):
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    pw_bytes = plain_password.encode("utf-8")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. A malformed hash never matches."""
    if password_too_long(plain_password):
        return False
    pw_bytes = plain_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_access_token(user_id: int, email: str, role: str, settings: Settings) -> str:
    """Create a JWT access token with sub, email, role, aud, iss, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "aud": settings.JWT_AUDIENCE,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> CurrentUser:
    """
    Validate signature, algorithm, audience, issuer and expiry; return the embedded identity.

    Every failure raises AuthenticationError with the same message so callers
    cannot tell which check rejected the token.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError() from e
    try:
        return CurrentUser(
            id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
        )
    except (TypeError, ValueError) as e:
        raise AuthenticationError() from e
