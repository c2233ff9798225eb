"""Discovery of development packages across ancestor directories."""

import asyncio
import logging
from pathlib import Path

from autolink.config import Settings
from autolink.exceptions import AutolinkError
from autolink.exceptions import ErrorKind
from autolink.files import ancestor_dirs
from autolink.files import expand_pattern
from autolink.files import read_manifest
from autolink.files import read_package_entry
from autolink.registry import VersionRegistry
from autolink.tasks import settle

logger = logging.getLogger(__name__)


async def registry_from_dir(directory: Path, settings: Settings) -> VersionRegistry:
    """Build a registry from the manifest in a single directory.

    Args:
        directory: Directory that may contain a manifest
        settings: Manifest name and ignored directories

    Returns:
        VersionRegistry of every descriptor matched by the manifest

    Raises:
        AutolinkError: MANIFEST_NOT_FOUND if directory has no manifest,
            IO_FAILURE for any other problem
    """
    manifest = await asyncio.to_thread(read_manifest, directory, settings.manifest_name)

    try:
        expanded = await asyncio.gather(
            *(
                asyncio.to_thread(
                    expand_pattern, directory, pattern, settings.ignored_dirs
                )
                for pattern in manifest.patterns
            )
        )
    except OSError as e:
        raise AutolinkError.io_failure(directory, e) from e

    # Two patterns may reach the same file
    files = list(dict.fromkeys(path for paths in expanded for path in paths))
    entries = await asyncio.gather(
        *(asyncio.to_thread(read_package_entry, path) for path in files)
    )

    registry = VersionRegistry()
    for entry in entries:
        registry.add(entry)
    logger.debug("Found %d packages via %s", len(registry), directory)
    return registry


async def discover_registry(settings: Settings) -> VersionRegistry:
    """Discover and merge development packages from the project and ancestors.

    Every ancestor directory is tried concurrently and all attempts are
    allowed to finish. Registries are merged nearest directory first, so on
    a conflict the nearest manifest wins.

    Args:
        settings: Project directory to start from

    Returns:
        Merged VersionRegistry

    Raises:
        AutolinkError: NO_MANIFEST_FOUND_ANYWHERE if no directory has a
            manifest; the first hard failure if attempts failed and none
            succeeded
    """
    directories = ancestor_dirs(settings.project_dir)
    outcomes = await settle(registry_from_dir(d, settings) for d in directories)

    merged = VersionRegistry()
    found = False
    failures: list[Exception] = []
    for directory, outcome in zip(directories, outcomes):
        if outcome.ok:
            found = True
            merged.merge(outcome.value)
            continue
        error = outcome.error
        if isinstance(error, AutolinkError) and error.is_soft:
            continue
        logger.debug("Discovery failed in %s: %s", directory, error)
        failures.append(error)

    if found:
        return merged
    if failures:
        raise failures[0]
    raise AutolinkError(
        ErrorKind.NO_MANIFEST_FOUND_ANYWHERE,
        f"No {settings.manifest_name} file could be found above {settings.project_dir}",
        path=settings.project_dir,
    )
