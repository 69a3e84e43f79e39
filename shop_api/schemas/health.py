"""Schema for GET /api/health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a database connectivity check; used by load balancers."""

    status: Literal["ok"] = "ok"
    service: str = Field(default="shop-api")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
