"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
    "sqlite://",
)

JWT_SECRET_MIN_LEN = 32


class Settings(BaseSettings):
    """Validated, immutable application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Postgres in production; sqlite:// is accepted for local runs and tests
    DATABASE_URL: str

    # JWT authentication (algorithm is fixed to HS256 in core.security)
    JWT_SECRET: SecretStr
    JWT_EXPIRE_MINUTES: int = 1440
    JWT_AUDIENCE: str = "shop-api"
    JWT_ISSUER: str = "shop-backend"

    # Comma-separated origins; unset means any origin is allowed
    CORS_ORIGINS: str | None = None

    # Per-client-IP limits; RATE_LIMIT_ENABLED=false turns both off
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 100
    LOGIN_MAX_FAILURES: int = 5
    LOGIN_FAILURE_WINDOW_SECONDS: int = 900

    HOST: str = "0.0.0.0"
    PORT: int = 1480

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or SQLite URL (e.g. postgresql:// or sqlite://)"
            )
        return v.strip()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value().strip()) < JWT_SECRET_MIN_LEN:
            raise ValueError(
                f"JWT_SECRET must be at least {JWT_SECRET_MIN_LEN} characters"
            )
        return v

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("JWT_AUDIENCE", "JWT_ISSUER")
    @classmethod
    def validate_jwt_claim_value(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_AUDIENCE and JWT_ISSUER must be set and non-empty")
        return v.strip()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        for origin in v.split(","):
            s = origin.strip().lower()
            if not s:
                continue
            if not (s.startswith("http://") or s.startswith("https://")):
                raise ValueError(
                    "CORS_ORIGINS must be a comma-separated list of http(s) origins"
                )
        return v.strip()

    @field_validator("RATE_LIMIT_PER_MINUTE", "LOGIN_MAX_FAILURES", "LOGIN_FAILURE_WINDOW_SECONDS")
    @classmethod
    def validate_rate_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("rate limit values must be positive")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @property
    def cors_origins(self) -> list[str]:
        """Parsed CORS origin list; ["*"] when CORS_ORIGINS is unset."""
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip().rstrip("/") for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
