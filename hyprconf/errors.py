"""Exceptions raised while loading structured documents with includes."""

from pathlib import Path


class IncludeLoadError(Exception):
    """
    Base class for failures of an include-resolving load.

    Every error carries the path of the file that was being loaded.
    """

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class IncludeReadError(IncludeLoadError):
    """Raised when a file being loaded cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(path, f"I/O error reading {path}: {reason}")


class IncludeParseError(IncludeLoadError):
    """Raised when a file's content is not a valid structured document."""

    def __init__(self, path: Path, reason: str):
        super().__init__(path, f"parse error in {path}: {reason}")


class CyclicIncludeError(IncludeLoadError):
    """
    Raised when a file includes itself through some chain of includes.

    ``path`` is the canonical path of the file found twice on the chain.
    """

    def __init__(self, path: Path):
        super().__init__(path, f"cyclic include: {path}")
