"""Matriculation number extraction from previously built archives."""
from __future__ import annotations

import logging
import re
from pathlib import Path

from solution_packer.exceptions import PathNotFound
from solution_packer.folders import PatternLike

logger = logging.getLogger(__name__)


def find_archives(root: Path, extension: str) -> list[Path]:
    """All files below ``root`` with the given extension, in sorted path order."""
    suffix = extension.lstrip(".")
    return sorted(p for p in root.rglob(f"*.{suffix}") if p.is_file())


def extract_numbers(
    root: Path,
    pattern: PatternLike,
    extension: str = "zip",
    all_occurrences: bool = False,
) -> list[str]:
    """Extract identifiers from archive file names under ``root``.

    The first capturing group of ``pattern`` is taken from each file name;
    a group that did not participate in the match yields ``""``. File names
    that do not match at all contribute nothing. Values are not validated.

    Args:
        root: Directory searched recursively
        pattern: Regex whose first group captures the identifier
        extension: Archive file extension
        all_occurrences: Keep duplicates instead of deduplicating

    Returns:
        Extracted values in discovery order; deduplicated on first
        occurrence unless ``all_occurrences`` is set.

    Raises:
        PathNotFound: If ``root`` does not exist or is not a directory
    """
    root = Path(root)
    if not root.exists():
        raise PathNotFound(f"Root path not found: {root}")
    if not root.is_dir():
        raise PathNotFound(f"Root path is not a directory: {root}")

    values = []
    for archive in find_archives(root, extension):
        m = re.search(pattern, archive.name)
        if m is None:
            logger.debug(f"No identifier in {archive.name}")
            continue
        values.append(m.group(1) or "")

    if all_occurrences:
        return values
    return list(dict.fromkeys(values))


__all__ = ["find_archives", "extract_numbers"]
