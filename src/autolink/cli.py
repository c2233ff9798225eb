"""Command-line interface for autolink."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from autolink import __version__
from autolink.config import Settings
from autolink.exceptions import AutolinkError
from autolink.exceptions import ErrorKind
from autolink.models import LinkState
from autolink.operations import compute_matches
from autolink.operations import discover_registry
from autolink.operations import link_modules
from autolink.operations import list_links
from autolink.operations import remove_links
from autolink.output import print_link_records
from autolink.output import print_links
from autolink.output import print_matches
from autolink.output import print_registry
from autolink.output import setup_logging

app = typer.Typer(help="Link local development packages into node_modules")

ProjectOption = Annotated[
    Path | None,
    typer.Option("--project", "-p", help="Project directory (default: cwd)"),
]
ModulesOption = Annotated[
    Path | None,
    typer.Option(
        "--modules-dir", help="Installed packages directory (default: node_modules)"
    ),
]
NameArgument = Annotated[
    str | None, typer.Argument(help="Only this package (default: all)")
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"autolink {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """Link local development packages into node_modules."""
    setup_logging(verbose)


def _settings(project: Path | None, modules_dir: Path | None) -> Settings:
    if project is None:
        project = Path.cwd()
    return Settings.for_project(project, modules_dir)


def _fail(e: AutolinkError) -> typer.Exit:
    if e.kind is ErrorKind.NO_MANIFEST_FOUND_ANYWHERE:
        message = f"✗ {e}"
    elif e.kind is ErrorKind.NO_PROJECT_MANIFEST:
        message = f"✗ Project error: {e}"
    else:
        message = f"✗ Error: {e}"
    typer.secho(message, fg=typer.colors.RED, bold=True, err=True)
    return typer.Exit(1)


@app.command()
def packages(project: ProjectOption = None, modules_dir: ModulesOption = None) -> None:
    """Show development packages found via .autolink files."""
    try:
        registry = asyncio.run(discover_registry(_settings(project, modules_dir)))
    except AutolinkError as e:
        raise _fail(e) from None
    print_registry(registry)


@app.command()
def matches(project: ProjectOption = None, modules_dir: ModulesOption = None) -> None:
    """Show dependencies that development packages satisfy."""
    try:
        found = asyncio.run(compute_matches(_settings(project, modules_dir)))
    except AutolinkError as e:
        raise _fail(e) from None
    print_matches(found)


@app.command()
def link(
    name: NameArgument = None,
    project: ProjectOption = None,
    modules_dir: ModulesOption = None,
) -> None:
    """Replace installed packages with symlinks to development sources."""
    try:
        records = asyncio.run(
            link_modules(_settings(project, modules_dir), only=name)
        )
    except AutolinkError as e:
        raise _fail(e) from None
    print_link_records(records, "Linked")
    if any(r.state is LinkState.FAILED for r in records):
        raise typer.Exit(1)


@app.command()
def unlink(
    name: NameArgument = None,
    project: ProjectOption = None,
    modules_dir: ModulesOption = None,
) -> None:
    """Remove development symlinks and restore backups."""
    try:
        records = asyncio.run(
            remove_links(_settings(project, modules_dir), only=name)
        )
    except AutolinkError as e:
        raise _fail(e) from None
    print_link_records(records, "Unlinked")
    if any(r.state is LinkState.FAILED for r in records):
        raise typer.Exit(1)


@app.command("list")
def list_command(
    project: ProjectOption = None, modules_dir: ModulesOption = None
) -> None:
    """List active development symlinks."""
    try:
        links = asyncio.run(list_links(_settings(project, modules_dir)))
    except AutolinkError as e:
        raise _fail(e) from None
    print_links(links)


def main() -> None:
    """Main entry point for the autolink CLI."""
    app()


if __name__ == "__main__":
    main()
