"""
Portfolio Backend — Shared Pydantic Schemas
=============================================

What:  Base model and cross-cutting response shapes (errors, health, counters).
Why:   The portfolio frontend speaks camelCase JSON while Python code uses
       snake_case; CamelModel maps between the two in one place.
How:   alias_generator=to_camel produces the wire names; populate_by_name lets
       services build models with Python names. FastAPI serializes response
       models by alias, so every response goes out in camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response models exchanged with the frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement returned by create endpoints."""
    message: str = Field(description="Human-readable success message")


class CountResponse(CamelModel):
    """Current value of a counter."""
    count: int = Field(ge=0, description="Counter value")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.
    Why:   Clients need a consistent structure to parse errors programmatically.

    Example:
        {
            "error": "not_found",
            "message": "Certification 'AWS' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
