"""
Ingestion request/response schemas.

Dependencies: pydantic
System role: Ingestion API contracts
"""

from pydantic import BaseModel, Field


class IngestRequest(BaseModel):
    """Request schema for repository ingestion."""

    path: str | None = Field(default=None, description="Local path of the repository to ingest")
    name: str | None = Field(default=None, description="Context name (defaults to the directory name)")


class IngestResponse(BaseModel):
    """Outcome of a completed ingestion run."""

    status: str = "success"
    name: str
    file_name: str
    files_processed: int
    files_skipped: int = 0
    chunks_generated: int
    db_path: str
    processing_time_ms: float = 0.0
