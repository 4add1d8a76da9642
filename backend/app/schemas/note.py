"""
Notekeeper Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the /notes endpoints.
Why:   Automatic JSON parsing, serialization, and OpenAPI doc generation.

Request bodies are deliberately permissive: every field is optional and
untyped beyond JSON. Missing and empty fields are reported by NoteService
with field-specific 400 messages, in a fixed order, instead of FastAPI's
generic 422 listing.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send in the JSON body
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""
    user: Optional[Any] = Field(default=None, description="Owning user's id")
    title: Optional[Any] = Field(default=None, description="Note title")
    text: Optional[Any] = Field(default=None, description="Note body")


class NoteUpdateRequest(BaseModel):
    """
    Body of PATCH /notes.

    All five fields are required; `completed` must be a JSON boolean
    (`"true"` or `1` are rejected).
    """
    id: Optional[Any] = Field(default=None, description="Id of the note to update")
    user: Optional[Any] = Field(default=None, description="Owning user's id")
    title: Optional[Any] = Field(default=None, description="Note title")
    text: Optional[Any] = Field(default=None, description="Note body")
    completed: Optional[Any] = Field(default=None, description="Completion flag (boolean)")


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /notes."""
    id: Optional[Any] = Field(default=None, description="Id of the note to delete")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteWithUsername(BaseModel):
    """
    What:  A note joined with its owner's username.
    Who:   Array items of GET /notes.

    `username` is null when the referenced user no longer exists.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    user: str = Field(description="Owning user's id")
    title: str
    text: str
    completed: bool
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
    username: Optional[str] = Field(default=None, description="Owner's username")


class MessageResponse(BaseModel):
    """Success reply of POST and PATCH /notes."""
    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "duplicate_note",
            "message": "Duplicate note",
            "details": {"existing_id": "2f1c..."},
            "request_id": "a1b2c3d4"
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
