"""Exercise folder discovery.

Lists the immediate subdirectories of a root path and keeps those whose
name matches the folder pattern. The pattern's first capturing group is the
exercise number.

Example:
    >>> from solution_packer.folders import find_exercise_folders
    >>> folders = find_exercise_folders(Path("sheets"), r"^exercise_(\\d+)$", newest=True)
    >>> [f.name for f in folders]
    ['exercise_03']
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from solution_packer.exceptions import PathNotFound
from solution_packer.types import ExerciseFolder

logger = logging.getLogger(__name__)

PatternLike = Union[str, re.Pattern]


def exercise_number(name: str, pattern: PatternLike) -> Optional[int]:
    """Return the exercise number captured from ``name``, or None if it does not match."""
    m = re.search(pattern, name)
    if m is None:
        return None
    captured = m.group(1)
    if not captured or not captured.isdecimal():
        logger.debug(f"Skipping {name!r}: capture {captured!r} is not a number")
        return None
    return int(captured)


def find_exercise_folders(
    root: Path,
    pattern: PatternLike,
    numbers: Optional[Iterable[int]] = None,
    newest: bool = False,
) -> list[ExerciseFolder]:
    """Discover exercise folders directly under ``root``.

    Args:
        root: Directory holding the exercise folders
        pattern: Regex whose first group captures the exercise number
        numbers: Keep only folders with one of these numbers (optional)
        newest: Return only the folder with the highest number

    Returns:
        Matching folders in ascending numeric order (at most one when
        ``newest`` is set). Empty when nothing matches.

    Raises:
        PathNotFound: If ``root`` does not exist or is not a directory
    """
    root = Path(root)
    if not root.exists():
        raise PathNotFound(f"Root path not found: {root}")
    if not root.is_dir():
        raise PathNotFound(f"Root path is not a directory: {root}")

    folders = []
    for child in root.iterdir():
        if not child.is_dir():
            continue
        number = exercise_number(child.name, pattern)
        if number is None:
            continue
        folders.append(ExerciseFolder(number=number, path=child))

    # Enumeration order is platform dependent; order by the captured number.
    folders.sort()

    if numbers is not None:
        wanted = {int(n) for n in numbers}
        folders = [f for f in folders if f.number in wanted]
        missing = wanted - {f.number for f in folders}
        if missing:
            logger.warning(f"No exercise folder for number(s): {sorted(missing)}")

    if newest:
        folders = folders[-1:]

    logger.info(f"Found {len(folders)} exercise folder(s) under {root}")
    return folders


__all__ = ["exercise_number", "find_exercise_folders"]
