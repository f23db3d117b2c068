"""
Context listing and deletion schemas.

Dependencies: pydantic
System role: Context management API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ContextInfo(BaseModel):
    """Stored context as listed by the fragment store."""

    name: str = Field(description="Sanitized context name")
    file_name: str = Field(description="File name inside the data directory")
    size: int = Field(description="File size in bytes")
    created_at: datetime = Field(description="File creation (or last change) time")


class DeleteContextRequest(BaseModel):
    """Request schema for context deletion."""

    name: str | None = None


class DeleteContextResponse(BaseModel):
    """Response schema for context deletion."""

    status: str
    deleted: str
