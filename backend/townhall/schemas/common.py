"""
Townhall Backend — Shared Schemas
===================================

What:  Base model for the camelCase wire format, pagination parameters and
       the error/health/delete response bodies.

Wire format:
    JSON keys are camelCase (mobileNo, userId, createdAt). Requests may
    also use the snake_case attribute names.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every API body: camelCase aliases, whitespace stripped."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        "str_strip_whitespace": True,
    }


class PaginationParams(BaseModel):
    """
    Optional slicing for list endpoints.

    limit=None returns every row from ``offset`` on.
    """

    limit: Optional[int] = Field(default=None, ge=1, description="Maximum items to return")
    offset: int = Field(default=0, ge=0, description="Items to skip")


class DeleteResponse(CamelModel):
    """Body returned by every DELETE endpoint (HTTP 200)."""

    message: str = Field(description="Human-readable confirmation")
    id: int = Field(description="Identifier of the deleted record")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "user with ID '7' was not found",
            "details": {"resource": "user", "resource_id": 7},
            "request_id": "1f0c2a9b"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
