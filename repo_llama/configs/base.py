"""
Base configuration settings.

Process-level settings shared by every config section: runtime environment,
log level and the address the API server binds to.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Runtime environment name")
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    api_host: str = Field(default="localhost", description="Interface the API server binds to")
    api_port: int = Field(default=8000, gt=0, lt=65536, description="API server port")
