"""Output formatting for autolink operations."""

import logging
import sys
from pathlib import Path

import typer

from autolink.models import Link
from autolink.models import LinkRecord
from autolink.models import LinkState
from autolink.models import Match
from autolink.registry import VersionRegistry


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG when verbose, else INFO."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def print_registry(registry: VersionRegistry) -> None:
    """Print discovered development packages."""
    if not len(registry):
        typer.secho("No development packages found", fg=typer.colors.BRIGHT_BLACK)
        return

    for entry in registry.entries():
        typer.echo(
            f"  {entry.name}@{entry.version} -> {_display_path(entry.source_path)}"
        )
    typer.secho(
        f"✓ {_plural(len(registry), 'package')} found", fg=typer.colors.GREEN, bold=True
    )


def print_matches(matches: list[Match]) -> None:
    """Print dependencies satisfied by development packages."""
    for match in matches:
        typer.echo(
            f"  {match.name}@{match.chosen_version} ({match.required_range}) "
            f"-> {_display_path(match.source_path)}"
        )
    typer.secho(
        f"✓ {_plural(len(matches), 'match', 'matches')}",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_link_records(records: list[LinkRecord], action: str) -> None:
    """Print the outcome of link or unlink.

    Args:
        records: One record per installed path
        action: Past-tense verb for the summary line ("Linked", "Unlinked")
    """
    for record in records:
        path_display = _display_path(record.installed_path)
        if record.state is LinkState.FAILED:
            typer.secho(
                f"  ✗ {record.name}: {record.error}", fg=typer.colors.RED, err=True
            )
        elif record.state is LinkState.CREATED:
            note = " (backup kept)" if record.backup else ""
            typer.echo(
                f"  {path_display} -> {_display_path(record.source_path)} "
                f"[{record.version}]{note}"
            )
        else:
            note = " (backup restored)" if record.backup else ""
            typer.echo(f"  {path_display}{note}")

    failed = sum(1 for r in records if r.state is LinkState.FAILED)
    done = len(records) - failed
    summary = f"{action} {_plural(done, 'package')}"
    if failed:
        summary += f", {failed} failed"
        typer.secho(f"✗ {summary}", fg=typer.colors.RED, bold=True, err=True)
    else:
        typer.secho(f"✓ {summary}", fg=typer.colors.GREEN, bold=True)


def print_links(links: list[Link]) -> None:
    """Print active development symlinks."""
    if not links:
        typer.secho("No linked packages", fg=typer.colors.BRIGHT_BLACK)
        return

    for link in links:
        typer.echo(f"  {link.name}@{link.version} -> {_display_path(link.target)}")


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    if plural is None:
        plural = singular + "s"
    return f"{count} {singular if count == 1 else plural}"


def _display_path(path: Path) -> str:
    """Format path for display, using ~ for home directory.

    Args:
        path: Path to format

    Returns:
        String representation with ~ substitution if applicable
    """
    try:
        rel_path = path.relative_to(Path.home())
        return f"~/{rel_path}"
    except ValueError:
        return str(path)
