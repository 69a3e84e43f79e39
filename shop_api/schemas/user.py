"""User read/update schemas. No schema here carries the password hash."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shop_api.schemas.auth import NAME_MAX_LEN, NAME_MIN_LEN, Role, normalize_name


class UserRead(BaseModel):
    """User as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role
    email_verified: bool | None = None
    phone: str | None = None
    city: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdate(BaseModel):
    """
    Partial update for self-service and admin edits.
    Only `name` is editable.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_name(v)
