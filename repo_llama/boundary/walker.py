"""
Repository file walker.

Lists the files of a local repository, skipping VCS metadata, build output,
lock files, secrets and binary media via gitwildmatch patterns.

Dependencies: pathspec, pathlib
System role: Ingestion source enumeration
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

from repo_llama.configs.ingestion import DEFAULT_IGNORE_PATTERNS
from repo_llama.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def build_ignore_spec(patterns: Iterable[str]) -> pathspec.PathSpec:
    """Compile gitwildmatch ignore patterns."""
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def walk_repo(root: str | Path, ignore_patterns: Iterable[str] | None = None) -> list[Path]:
    """
    Collect files under a repository root.

    Args:
        root: Repository directory (or a single file)
        ignore_patterns: gitwildmatch patterns (defaults to the built-in list)

    Returns:
        list[Path]: Sorted absolute file paths

    Raises:
        ValidationError: When root does not exist
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise ValidationError(f"Path does not exist: {root}", field="path")
    if root_path.is_file():
        return [root_path]

    spec = build_ignore_spec(DEFAULT_IGNORE_PATTERNS if ignore_patterns is None else ignore_patterns)
    logger.info(f"Scanning directory: {root_path}")

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=False):
        rel_dir = Path(dirpath).relative_to(root_path)
        # prune in place so ignored directories are never descended into
        dirnames[:] = sorted(
            d for d in dirnames if not spec.match_file(f"{(rel_dir / d).as_posix()}/")
        )
        for filename in filenames:
            rel_file = (rel_dir / filename).as_posix()
            if spec.match_file(rel_file):
                continue
            files.append(Path(dirpath) / filename)

    return sorted(files)
