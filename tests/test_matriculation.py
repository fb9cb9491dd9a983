"""Tests for matriculation number extraction."""
from pathlib import Path

import pytest

from solution_packer.exceptions import PathNotFound
from solution_packer.matriculation import extract_numbers, find_archives

PATTERN = r"^(\d+)_\d+\.zip$"


def _touch(root: Path, *rel: str) -> None:
    for r in rel:
        p = root / r
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")


@pytest.fixture
def submitted(tmp_path: Path) -> Path:
    root = tmp_path / "submitted"
    _touch(
        root,
        "a/7654321_01.zip",
        "b/1234567_01.zip",
        "b/7654321_02.zip",
        "c/1234567_03.zip",
        "c/readme.txt",
    )
    return root


class TestExtractNumbers:
    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(PathNotFound):
            extract_numbers(tmp_path / "missing", PATTERN)

    def test_root_is_a_file_raises(self, tmp_path):
        root = tmp_path / "1234567_01.zip"
        root.write_bytes(b"")
        with pytest.raises(PathNotFound, match="not a directory"):
            extract_numbers(root, PATTERN)

    def test_distinct_in_first_seen_order(self, submitted):
        assert extract_numbers(submitted, PATTERN) == ["7654321", "1234567"]

    def test_all_keeps_duplicates_in_discovery_order(self, submitted):
        values = extract_numbers(submitted, PATTERN, all_occurrences=True)
        assert values == ["7654321", "1234567", "7654321", "1234567"]

    def test_only_archive_extension_is_scanned(self, submitted):
        archives = find_archives(submitted, "zip")
        assert all(p.suffix == ".zip" for p in archives)
        assert len(archives) == 4

    def test_non_matching_names_are_skipped(self, tmp_path):
        _touch(tmp_path, "notes.zip", "1111111_01.zip")
        assert extract_numbers(tmp_path, PATTERN) == ["1111111"]

    def test_optional_group_yields_empty_string(self, tmp_path):
        _touch(tmp_path, "_01.zip")
        assert extract_numbers(tmp_path, r"^(\d+)?_\d+\.zip$") == [""]

    def test_custom_extension(self, tmp_path):
        _touch(tmp_path, "2222222_04.jar", "3333333_04.zip")
        assert extract_numbers(tmp_path, r"^(\d+)_", extension=".jar") == ["2222222"]

    def test_empty_tree(self, tmp_path):
        assert extract_numbers(tmp_path, PATTERN) == []
