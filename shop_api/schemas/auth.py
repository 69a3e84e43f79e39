"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

Role = Literal["user", "admin"]

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
# bcrypt reads at most this many bytes; anything longer would verify on its prefix alone.
PASSWORD_MAX_BYTES = 72


def normalize_name(v: str) -> str:
    """Strip surrounding whitespace; reject names that end up too short."""
    v = v.strip()
    if len(v) < NAME_MIN_LEN:
        raise ValueError(f"name must be at least {NAME_MIN_LEN} characters")
    return v


class RegisterRequest(BaseModel):
    """New account: email, display name and password."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., description="Email (stored lower-cased)")
    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return normalize_name(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., description="Email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginUser(BaseModel):
    """Public subset of the user returned next to the token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT for the Authorization: Bearer header")
    user: LoginUser


class CurrentUser(BaseModel):
    """Verified token identity (id, email, role) handed to route handlers."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    role: Role
