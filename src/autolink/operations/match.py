"""Matching project dependencies against discovered packages."""

from functools import cmp_to_key

import nodesemver

from autolink.config import Settings
from autolink.exceptions import AutolinkError
from autolink.exceptions import ErrorKind
from autolink.files import load_descriptor
from autolink.models import Dependency
from autolink.models import Match
from autolink.operations.discover import discover_registry
from autolink.registry import VersionRegistry

# Later groups override earlier ones when a name appears more than once
DEPENDENCY_GROUPS = ("dependencies", "devDependencies", "optionalDependencies")


def load_dependencies(settings: Settings) -> list[Dependency]:
    """Read the target project's declared dependencies.

    Regular, dev and optional dependencies are merged in that order; a name
    declared in several groups takes the range from the last one.

    Raises:
        AutolinkError: NO_PROJECT_MANIFEST if the project descriptor is
            missing or unreadable
    """
    path = settings.project_descriptor
    try:
        data = load_descriptor(path)
    except (OSError, AutolinkError) as e:
        raise AutolinkError(
            ErrorKind.NO_PROJECT_MANIFEST,
            f"No {settings.descriptor_name} found in {settings.project_dir}",
            path=path,
        ) from e

    ranges: dict[str, str] = {}
    for group in DEPENDENCY_GROUPS:
        declared = data.get(group) or {}
        if isinstance(declared, dict):
            ranges.update(declared)
    return [Dependency(name=name, range=str(range_)) for name, range_ in ranges.items()]


def satisfies(version: str, range_: str) -> bool:
    """Check a version against an npm-style range. Invalid input never matches."""
    try:
        return nodesemver.satisfies(version, range_, loose=False)
    except ValueError:
        return False


def best_version(versions: list[str], range_: str) -> str | None:
    """Return the highest version satisfying range_, or None."""
    candidates = [v for v in versions if satisfies(v, range_)]
    if not candidates:
        return None
    candidates.sort(key=cmp_to_key(lambda a, b: nodesemver.rcompare(a, b, False)))
    return candidates[0]


def match_dependencies(
    registry: VersionRegistry, dependencies: list[Dependency]
) -> list[Match]:
    """Select a development package for each satisfiable dependency.

    Dependencies missing from the registry, or with no satisfying version,
    are skipped.
    """
    matches = []
    for dependency in dependencies:
        if dependency.name not in registry:
            continue
        version = best_version(registry.versions(dependency.name), dependency.range)
        if version is None:
            continue
        matches.append(
            Match(
                name=dependency.name,
                chosen_version=version,
                required_range=dependency.range,
                source_path=registry.source_path(dependency.name, version),
            )
        )
    return matches


async def compute_matches(settings: Settings) -> list[Match]:
    """Discover development packages and match them to the project.

    Raises:
        AutolinkError: NO_PROJECT_MANIFEST, or any discovery failure
    """
    dependencies = load_dependencies(settings)
    registry = await discover_registry(settings)
    return match_dependencies(registry, dependencies)
