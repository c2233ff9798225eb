"""Custom exceptions for autolink."""

from enum import Enum
from enum import auto
from pathlib import Path


class ErrorKind(Enum):
    """What went wrong. Aggregation code matches on this, not on subclasses."""

    MANIFEST_NOT_FOUND = auto()  # No .autolink in one directory (soft)
    IO_FAILURE = auto()  # Any other filesystem or descriptor problem
    VERSION_CONFLICT = auto()  # Same (name, version) at two paths
    NO_PROJECT_MANIFEST = auto()  # Target project has no descriptor
    NO_MANIFEST_FOUND_ANYWHERE = auto()  # Ancestor walk found no .autolink


class AutolinkError(Exception):
    """Base exception for autolink, tagged with an ErrorKind."""

    def __init__(self, kind: ErrorKind, message: str, path: Path | None = None):
        self.kind = kind
        self.path = path
        super().__init__(message)

    @property
    def is_soft(self) -> bool:
        """True for conditions that are absorbed at aggregation boundaries."""
        return self.kind in (ErrorKind.MANIFEST_NOT_FOUND, ErrorKind.VERSION_CONFLICT)

    @classmethod
    def manifest_not_found(cls, path: Path) -> "AutolinkError":
        return cls(
            ErrorKind.MANIFEST_NOT_FOUND, f"No .autolink file at {path}", path=path
        )

    @classmethod
    def io_failure(cls, path: Path, error: Exception | str) -> "AutolinkError":
        return cls(ErrorKind.IO_FAILURE, f"{path}: {error}", path=path)
