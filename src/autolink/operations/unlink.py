"""Removing development symlinks and restoring backups."""

import asyncio
import logging

from autolink.config import Settings
from autolink.models import Link
from autolink.models import LinkRecord
from autolink.models import LinkState
from autolink.operations.inventory import list_links
from autolink.tasks import settle

logger = logging.getLogger(__name__)


async def unlink_one(link: Link, settings: Settings) -> LinkRecord:
    """Remove one symlink and move its backup back into place.

    A missing backup means the package was only ever linked in; the path is
    left absent. Once the symlink is gone the record is RESTORED even if the
    backup cannot be moved back; the reason is kept in the record's error.

    Raises:
        OSError: If the symlink cannot be removed
    """
    await asyncio.to_thread(link.path.unlink)

    backup_path = settings.backup_path(link.path)
    restored = True
    error = None
    try:
        await asyncio.to_thread(backup_path.rename, link.path)
    except FileNotFoundError:
        restored = False
        logger.warning("No backup to restore for %s", link.path)
    except OSError as e:
        restored = False
        error = str(e)
        logger.warning("Could not restore backup %s: %s", backup_path, e)

    return LinkRecord(
        name=link.name,
        installed_path=link.path,
        source_path=link.target,
        version=link.version,
        state=LinkState.RESTORED,
        backup=restored,
        error=error,
    )


async def remove_links(settings: Settings, only: str | None = None) -> list[LinkRecord]:
    """Remove active development symlinks concurrently.

    Args:
        settings: Installed-packages directory
        only: If set, remove only the link for this package name

    Returns:
        One LinkRecord per link; failures are FAILED records
    """
    links = await list_links(settings)
    selected = [link for link in links if only is None or link.name == only]

    outcomes = await settle(unlink_one(link, settings) for link in selected)

    records = []
    for link, outcome in zip(selected, outcomes):
        if outcome.ok:
            records.append(outcome.value)
            continue
        logger.error("Failed to unlink %s: %s", link.name, outcome.error)
        records.append(
            LinkRecord(
                name=link.name,
                installed_path=link.path,
                source_path=link.target,
                version=link.version,
                state=LinkState.FAILED,
                error=str(outcome.error),
            )
        )
    return records
