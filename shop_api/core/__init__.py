"""Core app configuration, database, security and access control."""

from shop_api.core.config import Settings, get_settings, settings
from shop_api.core.database import get_db

__all__ = ["Settings", "get_db", "get_settings", "settings"]
