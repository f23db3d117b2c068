"""
Ingestion configuration settings.

Chunk window, per-file size guard and walker ignore patterns.

Dependencies: pydantic, pydantic_settings
System role: Repository ingestion configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IGNORE_PATTERNS: list[str] = [
    "node_modules/",
    ".git/",
    ".next/",
    "dist/",
    "build/",
    ".vscode/",
    ".idea/",
    "target/",
    "bin/",
    "obj/",
    "venv/",
    ".venv/",
    "__pycache__/",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".gitignore",
    ".env",
    ".env.*",
    # media and archives
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.svg",
    "*.ico",
    "*.mp4",
    "*.zip",
    "*.tar",
    "*.gz",
    "*.pdf",
    "*.exe",
    "*.dll",
    "*.iso",
]


class IngestionSettings(BaseSettings):
    """Repository ingestion configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Fragment window size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Characters shared by consecutive fragments",
    )
    max_file_bytes: int = Field(
        default=1024 * 1024,
        gt=0,
        description="Files larger than this are skipped entirely",
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="gitwildmatch patterns excluded from the repository walk",
    )

    @model_validator(mode="after")
    def _check_window(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
