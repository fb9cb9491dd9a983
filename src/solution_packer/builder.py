"""Archive building for exercise solution folders.

For every selected exercise folder the files of its solution subdirectory
are filtered, the note file is appended and the external archiver writes
one archive into the solution subdirectory.

Example:
    >>> from solution_packer.config import load_settings
    >>> from solution_packer.builder import build_archives
    >>> result = build_archives(Path("sheets"), load_settings(), numbers=[1, 3])
    >>> print(result)
"""
from __future__ import annotations

import logging
import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Optional, Sequence

from solution_packer.archiver import build_command, run_archiver
from solution_packer.config import Settings
from solution_packer.exceptions import (
    EmptySelection,
    FilterConflict,
    PackerError,
    PathNotFound,
    SolutionPathMissing,
)
from solution_packer.folders import find_exercise_folders
from solution_packer.types import ArchiveEntry, BuildResult, ExerciseFolder, FileSelection

logger = logging.getLogger(__name__)

GLOB_CHARS = set("*?[")


def normalize_filter(entry: str) -> str:
    """Turn ``.txt``, ``txt`` or ``*.TXT`` into the glob ``*.txt``.

    Entries that already contain glob characters are kept as globs. Filters
    are lowercased because file names are matched case-insensitively.
    """
    e = entry.strip().lower()
    if GLOB_CHARS & set(e):
        return e
    return f"*.{e.lstrip('.')}"


def normalize_filters(entries: Optional[Iterable[str]]) -> list[str]:
    if not entries:
        return []
    return list(dict.fromkeys(normalize_filter(e) for e in entries if e.strip()))


def check_filters(include: Sequence[str], exclude: Sequence[str]) -> None:
    """Raise FilterConflict if an entry is both included and excluded."""
    overlap = sorted(set(include) & set(exclude))
    if overlap:
        raise FilterConflict(
            f"Entries present in both include and exclude lists: {', '.join(overlap)}"
        )


def _matches(name: str, globs: Sequence[str]) -> bool:
    lower = name.lower()
    return any(fnmatchcase(lower, g) for g in globs)


def select_files(
    solution_dir: Path,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
    note_file: Optional[Path] = None,
    skip: Iterable[Path] = (),
) -> FileSelection:
    """Files below ``solution_dir`` that match ``include`` and not ``exclude``.

    An empty ``include`` keeps every file. ``skip`` lists paths that are never
    selected (the archive about to be written).
    """
    include = normalize_filters(include)
    exclude = normalize_filters(exclude)
    skipped = {Path(p).resolve() for p in skip}

    files = []
    for path in sorted(solution_dir.rglob("*")):
        if not path.is_file() or path.resolve() in skipped:
            continue
        if include and not _matches(path.name, include):
            continue
        if exclude and _matches(path.name, exclude):
            logger.debug(f"Excluded {path}")
            continue
        files.append(path)

    return FileSelection(solution_dir=solution_dir, files=files, note_file=note_file)


def archive_entries(selection: FileSelection) -> list[ArchiveEntry]:
    """Base directory and entry path for every selected file.

    Files under the solution directory are stored relative to it; anything
    else (the note file) is stored by bare name from its own directory.
    """
    # Symlinks are not followed; a link inside the solution directory keeps its path.
    base = Path(os.path.abspath(selection.solution_dir))
    entries = []
    for path in selection.all_files():
        absolute = Path(os.path.abspath(path))
        if absolute.is_relative_to(base):
            entries.append(ArchiveEntry(base, absolute.relative_to(base).as_posix()))
        else:
            entries.append(ArchiveEntry(absolute.parent, absolute.name))
    return entries


def archive_name(
    number: str,
    extension: str,
    matriculation: Optional[str] = None,
    default_label: str = "solution",
) -> str:
    """``<matriculation>_<number>.<ext>``, or ``<default_label>_<number>.<ext>``."""
    label = matriculation if matriculation else default_label
    return f"{label}_{number}.{extension.lstrip('.')}"


def resolve_note_file(settings: Settings, no_note: bool) -> Optional[Path]:
    """The note file to append, or None when suppressed or not configured."""
    if no_note:
        return None
    if not settings.note_file:
        logger.debug("No note file configured")
        return None
    note = Path(settings.note_file)
    if not note.is_file():
        raise PathNotFound(f"Note file not found: {note}")
    return note


def build_archive(
    folder: ExerciseFolder,
    settings: Settings,
    include: Sequence[str],
    exclude: Sequence[str],
    note_file: Optional[Path] = None,
    matriculation: Optional[str] = None,
    dry_run: bool = False,
) -> Path:
    """Write the archive for one exercise folder and return its path.

    Raises:
        SolutionPathMissing: If the folder has no solution subdirectory
        EmptySelection: If neither files nor a note file are selected
        ArchiverError: If the archiver fails
    """
    solution_dir = folder.path / settings.solution_subdir
    if not solution_dir.is_dir():
        raise SolutionPathMissing(f"Solution path not found: {solution_dir}")

    name = archive_name(
        folder.padded(settings.archive.number_width),
        settings.archive.extension,
        matriculation=matriculation,
        default_label=settings.archive.default_label,
    )
    output = solution_dir / name

    selection = select_files(solution_dir, include, exclude, note_file=note_file, skip=[output])
    if len(selection) == 0:
        raise EmptySelection(f"No files selected from {solution_dir}")
    if not selection.files:
        logger.warning(f"{folder.name}: no files selected from {solution_dir}, packing the note file only")

    args = build_command(settings.archive.command, Path(os.path.abspath(output)), archive_entries(selection))

    if dry_run:
        logger.info(f"[dry-run] {folder.name}: {' '.join(args)}")
        return output

    if output.exists():
        output.unlink()
    logger.info(f"{folder.name}: packing {len(selection)} file(s) into {output}")
    run_archiver(args)
    return output


def build_archives(
    root: Path,
    settings: Settings,
    numbers: Optional[Iterable[int]] = None,
    all_folders: bool = False,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
    no_note: bool = False,
    matriculation: Optional[str] = None,
    keep_going: bool = False,
    dry_run: bool = False,
) -> BuildResult:
    """Build one archive per selected exercise folder.

    Selection: explicit ``numbers``, every folder (``all_folders``), or by
    default only the newest folder. ``exclude`` defaults to the archive
    extension so earlier output is never packed again.

    By default the first failing folder aborts the batch. With
    ``keep_going`` each failure is logged and recorded in the result and
    the remaining folders are still processed.

    Raises:
        FilterConflict: If include and exclude overlap (before any filesystem access)
        PathNotFound: If ``root`` or the configured note file does not exist
        SolutionPathMissing: If a folder lacks its solution subdirectory (unless keep_going)
        ArchiverError: If the archiver fails (unless keep_going)
    """
    if numbers is not None and all_folders:
        raise ValueError("Pass either explicit numbers or all_folders, not both")

    include = normalize_filters(include)
    exclude = normalize_filters(exclude) if exclude is not None else [settings.archive_glob]
    check_filters(include, exclude)

    if numbers is not None:
        folders = find_exercise_folders(root, settings.folder_regex, numbers=numbers)
    elif all_folders:
        folders = find_exercise_folders(root, settings.folder_regex)
    else:
        folders = find_exercise_folders(root, settings.folder_regex, newest=True)

    note_file = resolve_note_file(settings, no_note)

    result = BuildResult(total=len(folders))
    for folder in folders:
        try:
            output = build_archive(
                folder,
                settings,
                include,
                exclude,
                note_file=note_file,
                matriculation=matriculation,
                dry_run=dry_run,
            )
        except PackerError as e:
            if not keep_going:
                raise
            logger.error(f"{folder.name}: {e}")
            result.failed += 1
            result.errors.append((folder.name, str(e)))
            continue
        result.built += 1
        result.archives.append(output)

    logger.info(f"Built {result.built}/{result.total} archive(s)")
    return result


__all__ = [
    "normalize_filter",
    "normalize_filters",
    "check_filters",
    "select_files",
    "archive_entries",
    "archive_name",
    "resolve_note_file",
    "build_archive",
    "build_archives",
]
