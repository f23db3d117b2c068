"""
Fragment store and retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Context persistence and top-k configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FragmentStoreSettings(BaseSettings):
    """Location of the per-context JSON files."""

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: str = Field(
        default="data",
        description="Directory holding one <context>.json file per context",
    )


class RetrievalSettings(BaseSettings):
    """Similarity search configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=5, ge=0, description="Number of fragments used to ground an answer")
