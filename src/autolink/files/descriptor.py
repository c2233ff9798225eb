"""Package descriptor (package.json) loading."""

import json
from pathlib import Path

from autolink.exceptions import AutolinkError
from autolink.models import PackageEntry


def load_descriptor(path: Path) -> dict:
    """Load a package descriptor as a dict.

    Raises:
        FileNotFoundError: If the descriptor does not exist
        AutolinkError: IO_FAILURE if it is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AutolinkError.io_failure(path, f"Invalid descriptor: {e}") from e

    if not isinstance(data, dict):
        raise AutolinkError.io_failure(path, "Descriptor is not a JSON object")
    return data


def read_package_entry(path: Path) -> PackageEntry:
    """Build a PackageEntry from a descriptor file.

    Args:
        path: Descriptor file; its real parent directory is the source path

    Raises:
        AutolinkError: IO_FAILURE if the descriptor cannot be read or lacks
            a string name or version
    """
    try:
        data = load_descriptor(path)
    except OSError as e:
        raise AutolinkError.io_failure(path, e) from e

    name = data.get("name")
    version = data.get("version")
    if not isinstance(name, str) or not isinstance(version, str):
        raise AutolinkError.io_failure(path, "Descriptor needs string name and version")

    return PackageEntry(name=name, version=version, source_path=path.resolve().parent)
