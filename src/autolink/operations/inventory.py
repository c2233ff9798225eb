"""Inventory of symlinks currently in the installed-packages directory."""

import asyncio
import logging
from pathlib import Path

from autolink.config import Settings
from autolink.exceptions import AutolinkError
from autolink.files import load_descriptor
from autolink.models import Link
from autolink.tasks import settle

logger = logging.getLogger(__name__)


def _installed_entries(modules_dir: Path) -> list[tuple[str, Path]]:
    """List (name, path) for top-level entries and entries inside @scope dirs."""
    entries = []
    for path in sorted(modules_dir.iterdir()):
        if path.name.startswith("@") and path.is_dir() and not path.is_symlink():
            for scoped in sorted(path.iterdir()):
                entries.append((f"{path.name}/{scoped.name}", scoped))
        else:
            entries.append((path.name, path))
    return entries


async def inspect_link(name: str, path: Path, settings: Settings) -> Link:
    """Describe one installed entry as a Link.

    Raises:
        ValueError: If path is not a symlink
        OSError: If the link target's descriptor cannot be read
        AutolinkError: If the link target's descriptor is invalid
    """
    if not await asyncio.to_thread(path.is_symlink):
        raise ValueError(f"{path} is not a symlink")

    target = await asyncio.to_thread(path.readlink)
    target = path.parent / target  # Relative targets resolve from the link's directory
    descriptor = await asyncio.to_thread(
        load_descriptor, target / settings.descriptor_name
    )
    return Link(name=name, path=path, target=target, version=descriptor["version"])


async def list_links(settings: Settings) -> list[Link]:
    """List symlinked packages in the installed-packages directory.

    Best effort: entries that are not symlinks, or whose target has no
    readable descriptor, are left out. A missing installed-packages
    directory yields an empty list.

    Raises:
        AutolinkError: IO_FAILURE if the directory exists but cannot be listed

    Returns:
        Links sorted by package name
    """
    try:
        entries = await asyncio.to_thread(_installed_entries, settings.modules_dir)
    except FileNotFoundError:
        return []
    except OSError as e:
        raise AutolinkError.io_failure(settings.modules_dir, e) from e

    outcomes = await settle(inspect_link(name, path, settings) for name, path in entries)

    links = []
    for (name, _path), outcome in zip(entries, outcomes):
        if outcome.ok:
            links.append(outcome.value)
        else:
            logger.debug("Skipping %s: %s", name, outcome.error)
    return links
