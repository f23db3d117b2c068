"""
Ollama service clients.

Exports: EmbeddingClient, OllamaEmbeddingClient, OllamaGenerationClient, GenerationStream
"""

from .embedding_client import EmbeddingClient, OllamaEmbeddingClient
from .generation_client import GenerationStream, OllamaGenerationClient

__all__ = [
    "EmbeddingClient",
    "GenerationStream",
    "OllamaEmbeddingClient",
    "OllamaGenerationClient",
]
