# src/solution_packer/exceptions.py


class PackerError(Exception):
    """Base class for all solution_packer errors."""

    pass


class PathNotFound(PackerError, FileNotFoundError):
    """Raised when a root path, note file or other required path does not exist."""

    pass


class SolutionPathMissing(PathNotFound):
    """Raised when an exercise folder has no solution subdirectory."""

    pass


class FilterConflict(PackerError, ValueError):
    """Raised when an entry appears in both the include and exclude lists."""

    pass


class ConfigError(PackerError, ValueError):
    """Raised for invalid configuration (e.g., a pattern without a capturing group)."""

    pass


class ArchiverError(PackerError):
    """Raised when the external archiving tool fails or cannot be started."""

    pass


class EmptySelection(PackerError):
    """Raised when an exercise folder yields nothing to archive."""

    pass
