# src/solution_packer/__init__.py
from __future__ import annotations

# -------- Configuration --------
from .config import Settings, ArchiveSettings, load_settings

# -------- Errors --------
from .exceptions import (
    PackerError,
    PathNotFound,
    SolutionPathMissing,
    FilterConflict,
    ConfigError,
    ArchiverError,
    EmptySelection,
)

# -------- Discovery --------
from .folders import find_exercise_folders
from .matriculation import extract_numbers

# -------- Building --------
from .builder import build_archives
from .types import ExerciseFolder, FileSelection, ArchiveEntry, BuildResult

__all__ = [
    # Configuration
    "Settings", "ArchiveSettings", "load_settings",

    # Errors
    "PackerError", "PathNotFound", "SolutionPathMissing", "FilterConflict",
    "ConfigError", "ArchiverError", "EmptySelection",

    # Discovery
    "find_exercise_folders", "extract_numbers",

    # Building
    "build_archives", "ExerciseFolder", "FileSelection", "ArchiveEntry", "BuildResult",
]
__version__ = "0.1.0"
