"""SQLAlchemy ORM models."""

from shop_api.models.base import Base
from shop_api.models.user import ROLES, User

__all__ = ["Base", "ROLES", "User"]
