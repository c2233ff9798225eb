"""Filesystem builders shared by tests."""

import json
from pathlib import Path


def write_descriptor(directory: Path, **fields) -> Path:
    """Write a package.json with the given fields into directory."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields))
    return path
