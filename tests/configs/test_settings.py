"""
Test suite for configuration settings.

System role: Verification of env-driven configuration
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from repo_llama.configs import Settings
from repo_llama.configs.ingestion import DEFAULT_IGNORE_PATTERNS, IngestionSettings
from repo_llama.configs.ollama import OllamaSettings
from repo_llama.configs.store import FragmentStoreSettings, RetrievalSettings


class TestDefaults:
    """Test suite for default values."""

    def test_ollama_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("OLLAMA_BASE_URL", "OLLAMA_EMBEDDING_MODEL", "OLLAMA_GENERATION_MODEL"):
            monkeypatch.delenv(var, raising=False)

        settings = OllamaSettings(_env_file=None)

        assert settings.base_url == "http://localhost:11434"
        assert settings.embedding_model == "nomic-embed-text"
        assert settings.generation_model == "llama3.1"
        assert settings.timeout_seconds == 120.0

    def test_ingestion_defaults(self) -> None:
        settings = IngestionSettings(_env_file=None)

        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 200
        assert settings.max_file_bytes == 1024 * 1024
        assert settings.ignore_patterns == DEFAULT_IGNORE_PATTERNS

    def test_store_and_retrieval_defaults(self) -> None:
        assert FragmentStoreSettings(_env_file=None).data_dir == "data"
        assert RetrievalSettings(_env_file=None).top_k == 5

    def test_settings_aggregates_sections(self) -> None:
        settings = Settings(_env_file=None)

        assert isinstance(settings.ollama, OllamaSettings)
        assert isinstance(settings.ingestion, IngestionSettings)
        assert settings.log_level == "INFO"


class TestEnvironmentOverrides:
    """Test suite for environment variable overrides."""

    def test_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
        monkeypatch.setenv("OLLAMA_EMBEDDING_MODEL", "mxbai-embed-large")
        monkeypatch.setenv("INGEST_CHUNK_SIZE", "500")
        monkeypatch.setenv("INGEST_CHUNK_OVERLAP", "50")
        monkeypatch.setenv("RETRIEVAL_TOP_K", "8")

        settings = Settings(_env_file=None)

        assert settings.ollama.base_url == "http://gpu-box:11434"
        assert settings.ollama.embedding_model == "mxbai-embed-large"
        assert settings.ingestion.chunk_size == 500
        assert settings.ingestion.chunk_overlap == 50
        assert settings.retrieval.top_k == 8

    def test_overlap_not_smaller_than_size_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            IngestionSettings(_env_file=None, chunk_size=100, chunk_overlap=100)

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            OllamaSettings(_env_file=None, timeout_seconds=0)

    def test_api_address_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_HOST", "0.0.0.0")
        monkeypatch.setenv("API_PORT", "9000")

        settings = Settings(_env_file=None)

        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 9000
