"""Error body schema, used to document failure responses in OpenAPI."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    path: str
    message: str


class ErrorResponse(BaseModel):
    """Uniform failure body: {"error": ..., "details"?: [...]}."""

    error: str
    details: list[ErrorDetail] | None = None
