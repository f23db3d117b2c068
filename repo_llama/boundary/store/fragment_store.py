"""
Local JSON persistence for contexts.

One JSON array of {source, text, embedding} per context, stored as
<data_dir>/<sanitized name>.json. Writes go to a temporary file in the same
directory and are moved into place, so a context file is either the previous
complete version or the new complete version.

Dependencies: json, pathlib, pydantic
System role: Fragment Store (persistence of ingested contexts)
"""

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from repo_llama.core.exceptions import (
    CorruptCollectionError,
    DimensionMismatchError,
    NotFoundError,
    ValidationError,
)
from repo_llama.core.similarity import check_dimensions
from repo_llama.models.context import ContextInfo
from repo_llama.models.fragment import Collection, Fragment

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_FILE_SUFFIX = ".json"


def sanitize_context_name(name: str) -> str:
    """
    Make a context name safe to use as a file name component.

    Every character outside [A-Za-z0-9_-] becomes '_', which rules out path
    separators and '..' segments.

    Raises:
        ValidationError: When the name is empty
    """
    if not name or not name.strip():
        raise ValidationError("Context name is required", field="name")
    return _UNSAFE_NAME_CHARS.sub("_", name)


class FragmentStore:
    """Store named contexts as JSON files in a data directory."""

    def __init__(self, data_dir: str | Path) -> None:
        """
        Initialize store with its data directory.

        Args:
            data_dir: Directory holding the context files

        Creates directory if it does not exist.
        """
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, name: str) -> Path:
        """File path of a context, after sanitization."""
        return self._data_dir / f"{sanitize_context_name(name)}{_FILE_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, fragments: list[Fragment]) -> Path:
        """
        Write a context, replacing any previous version atomically.

        Args:
            name: Context name (sanitized before use)
            fragments: Complete fragment list for the context

        Returns:
            Path: Path of the written file

        Raises:
            DimensionMismatchError: When fragment embeddings differ in length
        """
        output_path = self.path_for(name)

        expected: int | None = None
        for fragment in fragments:
            if expected is None:
                expected = len(fragment.embedding)
            elif len(fragment.embedding) != expected:
                raise DimensionMismatchError(
                    expected=expected,
                    actual=len(fragment.embedding),
                    details={"context_name": output_path.stem, "source": fragment.source},
                )

        payload = [fragment.model_dump(include={"source", "text", "embedding"}) for fragment in fragments]

        fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, prefix=f".{output_path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(
            "Context saved",
            extra={"context_name": output_path.stem, "fragments": len(fragments), "path": str(output_path)},
        )
        return output_path

    def load(self, name: str) -> Collection:
        """
        Read and validate a context.

        Raises:
            NotFoundError: No file for this context
            CorruptCollectionError: Invalid JSON, wrong shape or mixed dimensions
        """
        path = self.path_for(name)
        context_name = path.stem
        if not path.is_file():
            raise NotFoundError(context_name)

        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptCollectionError(
                f"Context file is not valid JSON: {e}", context_name=context_name
            ) from e

        if not isinstance(raw, list):
            raise CorruptCollectionError("Context file must hold a JSON array", context_name=context_name)

        try:
            fragments = [Fragment.model_validate(item) for item in raw]
        except PydanticValidationError as e:
            raise CorruptCollectionError(
                "Context file holds malformed fragments",
                context_name=context_name,
                details={"errors": e.error_count()},
            ) from e

        check_dimensions(fragments, context_name=context_name)
        return Collection(name=context_name, fragments=fragments)

    def list_contexts(self) -> list[ContextInfo]:
        """List stored contexts, sorted by name."""
        contexts = []
        for path in sorted(self._data_dir.glob(f"*{_FILE_SUFFIX}")):
            if not path.is_file() or path.name.startswith("."):
                continue
            stats = path.stat()
            created = getattr(stats, "st_birthtime", None) or stats.st_ctime
            contexts.append(
                ContextInfo(
                    name=path.stem,
                    file_name=path.name,
                    size=stats.st_size,
                    created_at=datetime.fromtimestamp(created, tz=timezone.utc),
                )
            )
        return contexts

    def delete(self, name: str) -> str:
        """
        Delete a context.

        Returns:
            str: The sanitized name that was deleted

        Raises:
            NotFoundError: No file for this context
        """
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(path.stem) from e

        logger.info("Context deleted", extra={"context_name": path.stem})
        return path.stem
