"""Data models for autolink."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass
class Manifest:
    """Contents of one .autolink file."""

    directory: Path  # Directory containing the .autolink file
    patterns: list[str]  # Glob patterns, blank lines already dropped


@dataclass(frozen=True)
class PackageEntry:
    """A development package found through a manifest."""

    name: str
    version: str
    source_path: Path  # Absolute directory containing the descriptor


@dataclass(frozen=True)
class Dependency:
    """A dependency declared by the target project."""

    name: str
    range: str


@dataclass(frozen=True)
class Match:
    """A development package selected to satisfy a dependency."""

    name: str
    chosen_version: str
    required_range: str
    source_path: Path


class LinkState(str, Enum):
    """Outcome of linking or unlinking one installed path."""

    CREATED = "created"
    RESTORED = "restored"
    FAILED = "failed"


@dataclass
class LinkRecord:
    """What happened to one installed path during link or unlink."""

    name: str
    installed_path: Path
    source_path: Path
    version: str | None
    state: LinkState
    backup: bool = False  # Link: a backup was made. Unlink: a backup was restored.
    error: str | None = None


@dataclass(frozen=True)
class Link:
    """A symlink currently present in the installed-packages directory."""

    name: str  # Package name, including scope if any
    path: Path  # The symlink itself
    target: Path  # Where it points
    version: str
