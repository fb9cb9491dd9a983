from pathlib import Path

import pytest

from solution_packer.config import ArchiveSettings, Settings


@pytest.fixture
def note_file(tmp_path: Path) -> Path:
    p = tmp_path / "notes" / "NOTE.txt"
    p.parent.mkdir()
    p.write_text("packed automatically\n")
    return p


@pytest.fixture
def settings(note_file: Path) -> Settings:
    return Settings(
        archive_pattern=r"^(\d+)_\d+\.zip$",
        folder_pattern=r"^exercise_(\d+)$",
        solution_subdir="solution",
        note_file=str(note_file),
        archive=ArchiveSettings(command="jar", extension="zip", default_label="solution"),
    )


@pytest.fixture
def sheets(tmp_path: Path) -> Path:
    """exercise_01..03, each with solution/Main.java."""
    root = tmp_path / "sheets"
    for n in (1, 2, 3):
        sol = root / f"exercise_{n:02d}" / "solution"
        sol.mkdir(parents=True)
        (sol / "Main.java").write_text(f"class Main{n} {{}}\n")
    return root
