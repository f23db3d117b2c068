"""
Shared test fixtures and configuration for entire test suite.

Provides: demo fragments, temp fragment store and a sample repository tree
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from repo_llama.boundary.store import FragmentStore
from repo_llama.models.fragment import Fragment


@pytest.fixture
def demo_fragments() -> list[Fragment]:
    """Two-fragment collection used by the end-to-end scenario."""
    return [
        Fragment(source="a.ts", text="function add(a,b){return a+b}", embedding=[1.0, 0.0]),
        Fragment(source="b.ts", text="const x = 1", embedding=[0.0, 1.0]),
    ]


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp(prefix="repo_llama_test_"))
    yield temp_path

    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fragment_store(temp_dir: Path) -> FragmentStore:
    """Fragment store writing into a temp data directory."""
    return FragmentStore(temp_dir / "data")


@pytest.fixture
def demo_store(fragment_store: FragmentStore, demo_fragments: list[Fragment]) -> FragmentStore:
    """Fragment store holding the `demo` context."""
    fragment_store.save("demo", demo_fragments)
    return fragment_store


@pytest.fixture
def sample_repo(temp_dir: Path) -> Path:
    """
    Small repository tree with files that must and must not be ingested.

    Returns:
        Path: Repository root
    """
    root = temp_dir / "sample_repo"
    (root / "src").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / "src" / "add.ts").write_text("export const add = (a: number, b: number) => a + b;\n")
    (root / "README.md").write_text("# Sample\n\nA tiny repository.\n")
    (root / "node_modules" / "lib" / "index.js").write_text("module.exports = {};\n")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / ".env").write_text("SECRET=1\n")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "package-lock.json").write_text("{}\n")
    return root
