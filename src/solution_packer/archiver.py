"""External archiver invocation.

The archiver is called once per exercise folder with a structured
argument list, never through a shell:

    <command> cvf <output> -C <base_dir> <entry> [-C <base_dir> <entry> ...]
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable

from solution_packer.exceptions import ArchiverError
from solution_packer.types import ArchiveEntry

logger = logging.getLogger(__name__)

# create + verbose + output file follows
CREATE_FLAGS = "cvf"


def build_command(command: str, output: Path, entries: Iterable[ArchiveEntry]) -> list[str]:
    """Argument list for one archive."""
    args = [command, CREATE_FLAGS, str(output)]
    for entry in entries:
        args += ["-C", str(entry.base_dir), entry.entry_path]
    return args


def run_archiver(args: list[str]) -> subprocess.CompletedProcess:
    """Run the archiver and wait for it.

    Raises:
        ArchiverError: If the executable is missing or exits non-zero
    """
    logger.debug(f"Running: {args}")
    try:
        result = subprocess.run(args, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ArchiverError(f"Archiver not found: {args[0]}") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or e.stdout or "").strip()
        raise ArchiverError(
            f"Archiver exited with status {e.returncode}: {detail or 'no output'}"
        ) from e

    for line in (result.stdout or "").splitlines():
        logger.debug(line)
    return result


__all__ = ["CREATE_FLAGS", "build_command", "run_archiver"]
