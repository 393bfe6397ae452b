"""API request and response models not tied to one collection."""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    message: str
    redirect: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    services: dict[str, str]


class MessageResponse(BaseModel):
    message: str
