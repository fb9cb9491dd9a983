"""Type definitions for folder discovery and archive building.

Provides dataclasses for exercise folders, per-folder file selections,
archiver entries and batch build results.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, order=True)
class ExerciseFolder:
    """A directory matched by the folder pattern.

    Ordering compares ``number`` first, then ``path``, so a sorted list of
    folders is in ascending exercise order regardless of how the filesystem
    enumerated them.

    Attributes:
        number: Exercise number captured by the folder pattern
        path: Directory path

    Example:
        >>> folder = ExerciseFolder(number=3, path=Path("sheets/exercise_03"))
        >>> folder.padded()
        '03'
    """
    number: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def padded(self, width: int = 2) -> str:
        """Zero-padded exercise number."""
        return str(self.number).zfill(width)


@dataclass
class FileSelection:
    """Files picked for one archive.

    Attributes:
        solution_dir: Solution subdirectory the files were selected from
        files: Files under ``solution_dir`` that survived filtering
        note_file: Optional note file appended to the archive
    """
    solution_dir: Path
    files: list[Path] = field(default_factory=list)
    note_file: Optional[Path] = None

    def all_files(self) -> list[Path]:
        """Selected files followed by the note file, if any."""
        if self.note_file is None:
            return list(self.files)
        return [*self.files, self.note_file]

    def __len__(self) -> int:
        return len(self.files) + (1 if self.note_file is not None else 0)


@dataclass(frozen=True)
class ArchiveEntry:
    """One ``-C base_dir entry_path`` pair for the archiver."""
    base_dir: Path
    entry_path: str


@dataclass
class BuildResult:
    """Result of a batch archive build.

    Attributes:
        total: Exercise folders selected for building
        built: Archives written (or planned, for dry runs)
        failed: Folders that failed
        archives: Output paths of written archives
        errors: ``(folder name, message)`` for each failed folder

    Example:
        >>> result = BuildResult(total=3, built=2, failed=1)
        >>> print(result)
        Build Result:
          Total: 3
          Built: 2
          Failed: 1
    """
    total: int = 0
    built: int = 0
    failed: int = 0
    archives: list[Path] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def __str__(self) -> str:
        """Human-readable summary."""
        lines = [
            "Build Result:",
            f"  Total: {self.total}",
            f"  Built: {self.built}",
            f"  Failed: {self.failed}",
        ]
        for name, message in self.errors:
            lines.append(f"  - {name}: {message}")
        return "\n".join(lines)


__all__ = ["ExerciseFolder", "FileSelection", "ArchiveEntry", "BuildResult"]
