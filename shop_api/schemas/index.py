"""Schemas for the discovery endpoints (root, API index, section descriptors)."""

from typing import Literal

from pydantic import BaseModel, Field

AccessName = Literal["public", "token", "admin"]


class MessageResponse(BaseModel):
    message: str


class EndpointInfo(BaseModel):
    """One route in a section descriptor."""

    method: str
    path: str
    access: AccessName
    description: str


class SectionResponse(BaseModel):
    """Descriptor for a group of routes, e.g. GET /api/users."""

    section: str
    description: str
    endpoints: list[EndpointInfo]


class ApiIndexResponse(BaseModel):
    """Response for GET /api."""

    name: str
    version: str
    docs: str = Field(description="Swagger UI path")
    openapi: str = Field(description="OpenAPI JSON path")
    sections: dict[str, str] = Field(description="Section name -> base path")
