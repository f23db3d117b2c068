"""
Repository ingestion orchestrator.

Coordinates walk -> read -> chunk -> embed -> save. Embedding failures abort
the run before anything is written, so a context file never holds a partial
ingestion.

Dependencies: repo_llama.boundary, repo_llama.core, repo_llama.configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from repo_llama.boundary.ollama import EmbeddingClient
from repo_llama.boundary.store import FragmentStore, sanitize_context_name
from repo_llama.boundary.walker import walk_repo
from repo_llama.configs.ingestion import IngestionSettings
from repo_llama.core.chunker import chunk_text, validate_window
from repo_llama.core.exceptions import CorruptCollectionError, ValidationError
from repo_llama.models.fragment import Fragment
from repo_llama.models.ingest import IngestResponse

logger = logging.getLogger(__name__)

_BINARY_SNIFF_BYTES = 2048


def read_source_file(path: Path, max_bytes: int) -> str | None:
    """
    Read a file as UTF-8 text for chunking.

    Returns:
        str | None: File text, or None when the file is too large or binary
    """
    size = path.stat().st_size
    if size > max_bytes:
        logger.warning(
            f"Skipping large file: {path} ({size / 1024 / 1024:.2f} MB)",
            extra={"path": str(path), "size": size},
        )
        return None

    raw = path.read_bytes()
    if b"\0" in raw[:_BINARY_SNIFF_BYTES]:
        logger.debug("Skipping binary file", extra={"path": str(path)})
        return None
    return raw.decode("utf-8", errors="replace")


class IngestionService:
    """Build a context from a local repository."""

    def __init__(
        self,
        store: FragmentStore,
        embedder: EmbeddingClient,
        settings: IngestionSettings | None = None,
    ) -> None:
        """
        Initialize ingestion with its collaborators.

        Args:
            store: Fragment store receiving the finished context
            embedder: Embedding client for the chunk texts
            settings: Chunk window, size guard and ignore patterns
        """
        self._store = store
        self._embedder = embedder
        self._settings = settings or IngestionSettings()
        validate_window(self._settings.chunk_size, self._settings.chunk_overlap)

    def collect_chunks(self, files: list[Path]) -> tuple[list[tuple[str, str]], int]:
        """
        Read and chunk files.

        Unreadable, binary and oversized files are skipped.

        Returns:
            tuple: ([(source, text), ...] in file order, number of skipped files)
        """
        chunks: list[tuple[str, str]] = []
        skipped = 0
        for path in files:
            try:
                content = read_source_file(path, self._settings.max_file_bytes)
            except OSError as e:
                logger.error(
                    f"Error reading file {path}",
                    extra={"path": str(path), "error_type": type(e).__name__, "error_msg": str(e)},
                )
                skipped += 1
                continue

            if content is None:
                skipped += 1
                continue

            for text in chunk_text(content, self._settings.chunk_size, self._settings.chunk_overlap):
                chunks.append((str(path), text))
        return chunks, skipped

    async def ingest(self, path: str | None, name: str | None = None) -> IngestResponse:
        """
        Ingest a repository into a named context.

        Args:
            path: Local repository path
            name: Context name (defaults to the directory name)

        Returns:
            IngestResponse: Summary of the run

        Raises:
            ValidationError: Missing or nonexistent path
            TransportError, RemoteError: Embedding failed; nothing was saved
        """
        if not path or not path.strip():
            raise ValidationError("Path is required", field="path")

        start_time = time.perf_counter()
        if not name or not name.strip():
            name = Path(path).expanduser().resolve().name
        context_name = sanitize_context_name(name)

        files = await run_in_threadpool(walk_repo, path, self._settings.ignore_patterns)
        logger.info(f"Found {len(files)} files in {path}", extra={"context_name": context_name})

        chunks, skipped = await run_in_threadpool(self.collect_chunks, files)
        logger.info(f"Generated {len(chunks)} chunks. Starting embedding...")

        embeddings = await self._embedder.embed([text for _, text in chunks])
        if len(embeddings) != len(chunks):
            raise CorruptCollectionError(
                "Mismatch between chunk count and embedding count",
                context_name=context_name,
                details={"chunks": len(chunks), "embeddings": len(embeddings)},
            )

        fragments = [
            Fragment(source=source, text=text, embedding=embedding)
            for (source, text), embedding in zip(chunks, embeddings)
        ]
        output_path = await run_in_threadpool(self._store.save, context_name, fragments)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Ingestion complete",
            extra={
                "context_name": context_name,
                "files": len(files),
                "chunks": len(fragments),
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )

        return IngestResponse(
            name=context_name,
            file_name=output_path.name,
            files_processed=len(files),
            files_skipped=skipped,
            chunks_generated=len(fragments),
            db_path=str(output_path),
            processing_time_ms=elapsed_ms,
        )
