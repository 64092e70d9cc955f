"""
Endpoint Registry — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the service.
Why:   Input parsing, response serialization, and OpenAPI generation.
How:   FastAPI parses request bodies into these models and serializes
       responses through them (by alias, so JSON keys are camelCase).

Design Decision:
    The request payload declares name/path/method as optional. Presence is a
    business rule checked by EndpointService, which answers 400 with a single
    "Missing required fields" message (FastAPI's own schema validation would
    answer 422 per field). Type problems are still caught here and
    reported as 400 by the RequestValidationError handler.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EndpointPayload(BaseModel):
    """
    Body of POST /endpoints and PUT /endpoints/{id}.

    PUT is a full replacement: an omitted description clears the stored one.
    """
    name: Optional[str] = Field(default=None, description="Unique endpoint name")
    path: Optional[str] = Field(default=None, description="URL path, e.g. /ping")
    method: Optional[str] = Field(default=None, description="HTTP method label, e.g. GET")
    description: Optional[str] = Field(default=None, description="Free-form description")

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        return [
            field
            for field in ("name", "path", "method")
            if not getattr(self, field)
        ]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EndpointResponse(BaseModel):
    """
    Full representation of an API endpoint record.

    Returned by every endpoint route except DELETE. Serialized as
    {id, name, path, method, description, createdAt, updatedAt}.
    """
    id: uuid.UUID = Field(description="Unique endpoint identifier (UUID)")
    name: str = Field(description="Unique endpoint name")
    path: str = Field(description="URL path")
    method: str = Field(description="HTTP method label")
    description: Optional[str] = Field(default=None, description="Free-form description")
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification time (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; everything stored is UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class MessageResponse(BaseModel):
    """Plain acknowledgment, e.g. after a successful delete."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "An API endpoint with this name already exists.",
            "request_id": "1f0c2b7a"
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
