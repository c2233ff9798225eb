"""Replacing installed packages with symlinks to development sources."""

import asyncio
import logging

from autolink.config import Settings
from autolink.files import TargetKind
from autolink.files import inspect_target
from autolink.files import remove_path
from autolink.models import LinkRecord
from autolink.models import LinkState
from autolink.models import Match
from autolink.operations.match import compute_matches
from autolink.tasks import settle

logger = logging.getLogger(__name__)


async def link_match(match: Match, settings: Settings) -> LinkRecord:
    """Link one match into the installed-packages directory.

    An existing symlink is replaced. An existing real directory is moved to
    its backup path first, replacing any stale backup.

    Raises:
        OSError: If any filesystem step fails
    """
    installed_path = settings.installed_path(match.name)
    backup_path = settings.backup_path(installed_path)
    backup = False

    kind = await asyncio.to_thread(inspect_target, installed_path)
    if kind is TargetKind.SYMLINK:
        await asyncio.to_thread(installed_path.unlink)
    elif kind is TargetKind.REAL:
        await asyncio.to_thread(remove_path, backup_path)
        await asyncio.to_thread(installed_path.rename, backup_path)
        backup = True

    await asyncio.to_thread(
        settings.scope_dir(match.name).mkdir, parents=True, exist_ok=True
    )
    await asyncio.to_thread(
        installed_path.symlink_to, match.source_path, target_is_directory=True
    )

    return LinkRecord(
        name=match.name,
        installed_path=installed_path,
        source_path=match.source_path,
        version=match.chosen_version,
        state=LinkState.CREATED,
        backup=backup,
    )


async def link_matches(
    matches: list[Match], settings: Settings, only: str | None = None
) -> list[LinkRecord]:
    """Link every match concurrently, one task per installed path.

    Args:
        matches: Matches to link
        settings: Installed-packages directory
        only: If set, link only the package with this name

    Returns:
        One LinkRecord per attempted match; failures are FAILED records
    """
    # One task per installed path; a later duplicate is dropped
    selected = []
    seen = set()
    for match in matches:
        installed_path = settings.installed_path(match.name)
        if (only is not None and match.name != only) or installed_path in seen:
            continue
        seen.add(installed_path)
        selected.append(match)

    outcomes = await settle(link_match(m, settings) for m in selected)

    records = []
    for match, outcome in zip(selected, outcomes):
        if outcome.ok:
            records.append(outcome.value)
            continue
        logger.error("Failed to link %s: %s", match.name, outcome.error)
        records.append(
            LinkRecord(
                name=match.name,
                installed_path=settings.installed_path(match.name),
                source_path=match.source_path,
                version=match.chosen_version,
                state=LinkState.FAILED,
                error=str(outcome.error),
            )
        )
    return records


async def link_modules(settings: Settings, only: str | None = None) -> list[LinkRecord]:
    """Compute matches for the project and link them.

    Raises:
        AutolinkError: If matches cannot be computed
    """
    matches = await compute_matches(settings)
    return await link_matches(matches, settings, only=only)
