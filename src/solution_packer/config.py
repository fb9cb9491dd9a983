# src/solution_packer/config.py
"""
Central configuration loader for solution_packer.

- Reads config/default.yaml from the project (or any YAML path), falling
  back to the defaults shipped inside the package
- Loads a .env file (if present) so env overrides can live next to the project
- Converts nested mappings into typed dataclasses
- Validates the two filename patterns at load time
- Supports safe forward-compatibility (unknown keys ignored)
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from solution_packer.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config/default.yaml"

# Shipped with the package so installed copies work outside a source checkout.
PACKAGE_DEFAULTS = Path(__file__).resolve().parent / "defaults"
PACKAGE_CONFIG = PACKAGE_DEFAULTS / "default.yaml"


# -----------------------------
# Small, typed sub-configs
# -----------------------------
@dataclass
class ArchiveSettings:
    """External archiver and output naming."""
    command: str = "jar"
    extension: str = "zip"
    default_label: str = "solution"
    number_width: int = 2


# -----------------------------
# Top-level Settings
# -----------------------------
@dataclass
class Settings:
    """
    Root configuration object for solution_packer.

    ``archive_pattern`` captures the matriculation number from a built
    archive's file name (group 1). ``folder_pattern`` captures the exercise
    number from an exercise folder's name (group 1).
    """

    archive_pattern: str = r"^(\d+)_\d+\.zip$"
    folder_pattern: str = r"^exercise_?(\d+)$"
    solution_subdir: str = "solution"
    note_file: str | None = "note.txt"
    archive: ArchiveSettings = field(default_factory=ArchiveSettings)

    @property
    def archive_regex(self) -> re.Pattern[str]:
        return compile_pattern(self.archive_pattern, "archive_pattern")

    @property
    def folder_regex(self) -> re.Pattern[str]:
        return compile_pattern(self.folder_pattern, "folder_pattern")

    @property
    def archive_glob(self) -> str:
        """Glob matching files produced by the archiver."""
        return f"*.{self.archive.extension}"


# -----------------------------
# Helpers
# -----------------------------
def project_root(start: str | Path | None = None) -> Path:
    """
    Walk upward from 'start' (or this file) until a folder containing pyproject.toml is found.
    """
    cur = Path(start or __file__).resolve()
    for p in [cur, *cur.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return Path(__file__).resolve().parent


def compile_pattern(pattern: str, name: str) -> re.Pattern[str]:
    """Compile ``pattern`` and require at least one capturing group."""
    try:
        rx = re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"`{name}` is not a valid regular expression: {e}") from e
    if rx.groups < 1:
        raise ConfigError(f"`{name}` must contain at least one capturing group: {pattern!r}")
    return rx


def _as(obj: Any, cls: Any):
    """
    Minimal recursive 'constructor' to turn nested dicts into dataclass instances.
    Ignores unknown keys so YAML can be slightly ahead of code.
    """
    if obj is None or isinstance(obj, cls):
        return obj if obj is not None else cls()
    if isinstance(obj, dict):
        hints = {f.name for f in cls.__dataclass_fields__.values()}
        kwargs = {k: v for k, v in obj.items() if k in hints}
        for name, field_info in cls.__dataclass_fields__.items():
            typ = field_info.type
            if isinstance(kwargs.get(name), dict) and hasattr(typ, "__dataclass_fields__"):
                kwargs[name] = _as(kwargs[name], typ)
        return cls(**kwargs)
    return cls()


def _env_overrides(data: dict[str, Any]) -> None:
    """Apply SOLPACK_* environment variables on top of the YAML mapping."""
    top = {
        "SOLPACK_ARCHIVE_PATTERN": "archive_pattern",
        "SOLPACK_FOLDER_PATTERN": "folder_pattern",
        "SOLPACK_SOLUTION_SUBDIR": "solution_subdir",
        "SOLPACK_NOTE_FILE": "note_file",
    }
    for env, key in top.items():
        if os.getenv(env):
            data[key] = os.getenv(env)

    archive = dict(data.get("archive") or {})
    if os.getenv("SOLPACK_ARCHIVE_EXTENSION"):
        archive["extension"] = os.getenv("SOLPACK_ARCHIVE_EXTENSION")
    if os.getenv("SOLPACK_ARCHIVER"):
        archive["command"] = os.getenv("SOLPACK_ARCHIVER")
    if archive:
        data["archive"] = archive


def validate_settings(settings: Settings) -> Settings:
    """Raise ConfigError if the settings cannot drive discovery or building."""
    compile_pattern(settings.archive_pattern, "archive_pattern")
    compile_pattern(settings.folder_pattern, "folder_pattern")

    if not settings.solution_subdir:
        raise ConfigError("`solution_subdir` must not be empty")
    if Path(settings.solution_subdir).is_absolute():
        raise ConfigError(f"`solution_subdir` must be relative: {settings.solution_subdir}")

    ext = settings.archive.extension.lstrip(".")
    if not ext:
        raise ConfigError("`archive.extension` must not be empty")
    settings.archive.extension = ext

    if not settings.archive.command:
        raise ConfigError("`archive.command` must not be empty")
    if settings.archive.number_width < 1:
        raise ConfigError("`archive.number_width` must be >= 1")
    return settings


def _locate_config(yaml_path: str | Path, root: Path) -> Path:
    """Resolve a config path against the cwd, then the project root.

    The default path falls back to the copy shipped inside the package.
    """
    yml = Path(yaml_path)
    if yml.is_absolute():
        p = yml
    elif yml.exists():
        p = yml.resolve()
    else:
        p = (root / yml).resolve()

    if p.exists():
        return p
    if Path(yaml_path) == Path(DEFAULT_CONFIG):
        return PACKAGE_CONFIG
    raise ConfigError(f"Configuration file not found: {p}")


def load_settings(yaml_path: str | Path | None = DEFAULT_CONFIG) -> Settings:
    """
    Load YAML into Settings, merge environment overrides, normalize the
    note file path and validate the patterns.

    A project without config/default.yaml gets the packaged defaults; an
    explicitly requested file that does not exist is an error. A relative
    ``note_file`` resolves against the directory of the config file that set
    it (the packaged defaults directory when no file was read), or against
    the working directory when it came from SOLPACK_NOTE_FILE.
    """
    root = project_root()

    env_path = root / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger.debug(f"Loaded environment from {env_path}")

    data: dict[str, Any] = {}
    base_dir = PACKAGE_DEFAULTS
    if yaml_path is not None:
        p = _locate_config(yaml_path, root)
        loaded = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {p}")
        data = loaded
        base_dir = p.parent
        logger.debug(f"Loaded configuration from {p}")

    _env_overrides(data)
    if os.getenv("SOLPACK_NOTE_FILE"):
        base_dir = Path.cwd()

    settings = _as(data, Settings)
    settings.archive = _as(settings.archive, ArchiveSettings)

    # --- Normalize paths ---
    if settings.note_file:
        nf = Path(settings.note_file).expanduser()
        settings.note_file = str((base_dir / nf).resolve()) if not nf.is_absolute() else str(nf)

    return validate_settings(settings)


def preview_settings(settings: Settings) -> None:
    """
    Pretty-print a summary of the current config for debugging / CLI startup.
    """
    import pprint
    print("=== solution_packer Configuration ===")
    flat = {
        "archive_pattern": settings.archive_pattern,
        "folder_pattern": settings.folder_pattern,
        "solution_subdir": settings.solution_subdir,
        "note_file": settings.note_file,
    }
    pprint.pprint(flat)
    print("Nested groups:")
    print(f"  - archive: {settings.archive}")


__all__ = [
    "ArchiveSettings",
    "Settings",
    "project_root",
    "compile_pattern",
    "validate_settings",
    "PACKAGE_CONFIG",
    "load_settings",
    "preview_settings",
]
