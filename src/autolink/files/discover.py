"""Manifest reading and glob expansion."""

from collections.abc import Iterator
from fnmatch import fnmatchcase
from pathlib import Path
from pathlib import PurePath

from autolink.exceptions import AutolinkError
from autolink.models import Manifest


def ancestor_dirs(start_dir: Path) -> list[Path]:
    """List start_dir and every ancestor up to the filesystem root.

    Args:
        start_dir: Directory to start from (will be resolved to absolute)

    Returns:
        Directories ordered nearest first, ending with the root
    """
    start_dir = start_dir.resolve()
    return [start_dir, *start_dir.parents]


def read_manifest(directory: Path, manifest_name: str) -> Manifest:
    """Read the manifest file in a directory.

    Args:
        directory: Directory that may contain a manifest
        manifest_name: File name of the manifest (usually .autolink)

    Returns:
        Manifest with one glob pattern per non-blank line

    Raises:
        AutolinkError: MANIFEST_NOT_FOUND if there is no manifest file,
            IO_FAILURE if it exists but cannot be read
    """
    manifest_path = directory / manifest_name
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        raise AutolinkError.manifest_not_found(manifest_path) from None
    except (OSError, UnicodeDecodeError) as e:
        raise AutolinkError.io_failure(manifest_path, e) from e

    patterns = [line.strip() for line in text.splitlines()]
    return Manifest(directory=directory, patterns=[p for p in patterns if p])


def expand_pattern(
    directory: Path, pattern: str, ignored_dirs: tuple[str, ...]
) -> list[Path]:
    """Expand one glob pattern rooted at directory.

    ``**`` matches any number of directories but never descends into
    symlinked directories, hidden directories or ignored directories
    (node_modules, bower_components), so symlink cycles between packages
    cannot be followed. Absolute patterns ignore directory.

    Returns:
        Sorted absolute paths of matched files
    """
    parts = PurePath(pattern).parts
    if PurePath(pattern).is_absolute():
        directory, parts = Path(parts[0]), parts[1:]

    matches = {
        path for path in _walk(directory, parts, ignored_dirs) if path.is_file()
    }
    return sorted(matches)


def _walk(
    directory: Path, parts: tuple[str, ...], ignored_dirs: tuple[str, ...]
) -> Iterator[Path]:
    """Yield paths under directory matching the remaining pattern parts."""
    if not parts:
        yield directory
        return

    head, rest = parts[0], parts[1:]
    if head == "**":
        yield from _walk(directory, rest, ignored_dirs)
        for child in _children(directory):
            if (
                child.name in ignored_dirs
                or child.name.startswith(".")
                or child.is_symlink()
                or not child.is_dir()
            ):
                continue
            yield from _walk(child, parts, ignored_dirs)
        return

    if head in ignored_dirs:
        return

    if not _has_magic(head):
        child = directory / head
        if child.exists():
            yield from _walk(child, rest, ignored_dirs)
        return

    for child in _children(directory):
        if child.name in ignored_dirs:
            continue
        if child.name.startswith(".") and not head.startswith("."):
            continue
        if fnmatchcase(child.name, head):
            yield from _walk(child, rest, ignored_dirs)


def _children(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(directory.iterdir())


def _has_magic(part: str) -> bool:
    return any(char in part for char in "*?[")
