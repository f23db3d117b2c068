"""
Test suite for FragmentStore.

Uses a temp data directory per test.

System role: Verification of context persistence
"""

import json
from pathlib import Path

import pytest

from repo_llama.boundary.store import FragmentStore, sanitize_context_name
from repo_llama.core.exceptions import (
    CorruptCollectionError,
    DimensionMismatchError,
    NotFoundError,
    ValidationError,
)
from repo_llama.models.fragment import Fragment


class TestSanitizeContextName:
    """Test suite for sanitize_context_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("demo", "demo"),
            ("my-repo_2", "my-repo_2"),
            ("my repo", "my_repo"),
            ("../../etc/passwd", "______etc_passwd"),
            ("a/b\\c", "a_b_c"),
            ("repo.v2", "repo_v2"),
            ("café", "caf_"),
        ],
    )
    def test_replaces_unsafe_characters(self, name: str, expected: str) -> None:
        assert sanitize_context_name(name) == expected

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError):
            sanitize_context_name(name)


class TestSaveAndLoad:
    """Test suite for FragmentStore.save and load."""

    def test_save_writes_json_array(self, fragment_store: FragmentStore, demo_fragments: list[Fragment]) -> None:
        # Act
        path = fragment_store.save("demo", demo_fragments)

        # Assert
        assert path == fragment_store.data_dir / "demo.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [
            {"source": "a.ts", "text": "function add(a,b){return a+b}", "embedding": [1.0, 0.0]},
            {"source": "b.ts", "text": "const x = 1", "embedding": [0.0, 1.0]},
        ]

    def test_load_round_trips_order_and_fields(self, demo_store: FragmentStore, demo_fragments: list[Fragment]) -> None:
        collection = demo_store.load("demo")

        assert collection.name == "demo"
        assert collection.fragments == demo_fragments
        assert collection.dimension == 2

    def test_save_replaces_previous_version(self, demo_store: FragmentStore) -> None:
        replacement = [Fragment(source="c.ts", text="c", embedding=[0.5, 0.5, 0.5])]

        demo_store.save("demo", replacement)

        assert demo_store.load("demo").fragments == replacement

    def test_save_leaves_no_temp_files(self, demo_store: FragmentStore) -> None:
        assert sorted(p.name for p in demo_store.data_dir.iterdir()) == ["demo.json"]

    def test_traversal_name_stays_inside_data_dir(self, fragment_store: FragmentStore, demo_fragments: list[Fragment]) -> None:
        """Test a name with path segments cannot escape the data directory."""
        path = fragment_store.save("../outside", demo_fragments)

        assert path.parent == fragment_store.data_dir
        assert path.name == "___outside.json"
        assert not (fragment_store.data_dir.parent / "outside.json").exists()

    def test_mixed_dimensions_rejected_on_save(self, demo_store: FragmentStore) -> None:
        """Test a failed save does not touch the existing context."""
        before = demo_store.path_for("demo").read_bytes()
        fragments = [
            Fragment(source="a", text="a", embedding=[1.0, 0.0]),
            Fragment(source="b", text="b", embedding=[1.0, 0.0, 0.0]),
        ]

        with pytest.raises(DimensionMismatchError):
            demo_store.save("demo", fragments)

        assert demo_store.path_for("demo").read_bytes() == before

    def test_empty_collection_round_trips(self, fragment_store: FragmentStore) -> None:
        fragment_store.save("empty", [])

        collection = fragment_store.load("empty")

        assert collection.fragments == []
        assert collection.dimension is None

    def test_unicode_text_is_preserved(self, fragment_store: FragmentStore) -> None:
        fragments = [Fragment(source="i18n.ts", text="const greet = 'héllo 世界'", embedding=[1.0])]

        fragment_store.save("i18n", fragments)

        assert fragment_store.load("i18n").fragments[0].text == "const greet = 'héllo 世界'"

    def test_load_missing_raises_not_found(self, fragment_store: FragmentStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            fragment_store.load("nope")

        assert exc_info.value.context_name == "nope"

    def test_exists(self, demo_store: FragmentStore) -> None:
        assert demo_store.exists("demo") is True
        assert demo_store.exists("other") is False


class TestLoadValidation:
    """Test suite for rejecting corrupt context files."""

    def write_raw(self, store: FragmentStore, name: str, content: str) -> Path:
        path = store.data_dir / f"{name}.json"
        path.write_text(content, encoding="utf-8")
        return path

    def test_invalid_json(self, fragment_store: FragmentStore) -> None:
        self.write_raw(fragment_store, "broken", "[{")

        with pytest.raises(CorruptCollectionError):
            fragment_store.load("broken")

    def test_not_an_array(self, fragment_store: FragmentStore) -> None:
        self.write_raw(fragment_store, "object", '{"source": "a"}')

        with pytest.raises(CorruptCollectionError):
            fragment_store.load("object")

    def test_missing_fields(self, fragment_store: FragmentStore) -> None:
        self.write_raw(fragment_store, "partial", '[{"source": "a", "text": "t"}]')

        with pytest.raises(CorruptCollectionError):
            fragment_store.load("partial")

    def test_mixed_dimensions(self, fragment_store: FragmentStore) -> None:
        content = json.dumps(
            [
                {"source": "a", "text": "a", "embedding": [1.0, 0.0]},
                {"source": "b", "text": "b", "embedding": [1.0]},
            ]
        )
        self.write_raw(fragment_store, "mixed", content)

        with pytest.raises(CorruptCollectionError):
            fragment_store.load("mixed")

    @pytest.mark.parametrize("component", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_embedding(self, fragment_store: FragmentStore, component: str) -> None:
        content = (
            f'[{{"source": "a", "text": "a", "embedding": [{component}, 1.0]}},'
            ' {"source": "b", "text": "b", "embedding": [1.0, 0.0]}]'
        )
        self.write_raw(fragment_store, "nonfinite", content)

        with pytest.raises(CorruptCollectionError):
            fragment_store.load("nonfinite")


class TestListAndDelete:
    """Test suite for listing and deleting contexts."""

    def test_list_contexts_sorted_with_metadata(self, demo_store: FragmentStore, demo_fragments: list[Fragment]) -> None:
        demo_store.save("alpha", demo_fragments)

        contexts = demo_store.list_contexts()

        assert [c.name for c in contexts] == ["alpha", "demo"]
        assert contexts[1].file_name == "demo.json"
        assert contexts[1].size == demo_store.path_for("demo").stat().st_size
        assert contexts[1].created_at.tzinfo is not None

    def test_list_ignores_other_files(self, demo_store: FragmentStore) -> None:
        (demo_store.data_dir / "notes.txt").write_text("x")
        (demo_store.data_dir / ".demo.123.tmp").write_text("x")
        (demo_store.data_dir / "nested.json").mkdir()

        assert [c.name for c in demo_store.list_contexts()] == ["demo"]

    def test_list_empty_store(self, fragment_store: FragmentStore) -> None:
        assert fragment_store.list_contexts() == []

    def test_delete_removes_file(self, demo_store: FragmentStore) -> None:
        deleted = demo_store.delete("demo")

        assert deleted == "demo"
        assert demo_store.exists("demo") is False
        with pytest.raises(NotFoundError):
            demo_store.load("demo")

    def test_delete_missing_raises_not_found(self, fragment_store: FragmentStore) -> None:
        with pytest.raises(NotFoundError):
            fragment_store.delete("ghost")

    def test_data_dir_is_created(self, temp_dir: Path) -> None:
        store = FragmentStore(temp_dir / "nested" / "data")

        assert store.data_dir.is_dir()
