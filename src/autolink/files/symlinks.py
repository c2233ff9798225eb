"""Filesystem primitives for installed paths."""

import shutil
from enum import Enum
from enum import auto
from pathlib import Path


class TargetKind(Enum):
    """What currently occupies an installed path."""

    MISSING = auto()
    SYMLINK = auto()  # Any symlink, including broken ones
    REAL = auto()  # Real directory or file


def inspect_target(path: Path) -> TargetKind:
    """Classify path without following symlinks."""
    if path.is_symlink():
        return TargetKind.SYMLINK
    if path.exists(follow_symlinks=False):
        return TargetKind.REAL
    return TargetKind.MISSING


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree. Missing paths are ignored."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)
