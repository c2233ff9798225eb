"""Version registry of discovered development packages."""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from autolink.exceptions import AutolinkError
from autolink.exceptions import ErrorKind
from autolink.models import PackageEntry

logger = logging.getLogger(__name__)


@dataclass
class VersionRegistry:
    """Map of package name -> version -> source path.

    A (name, version) pair maps to exactly one path. The first path seen
    wins; later different paths are recorded as conflicts and logged.
    """

    packages: dict[str, dict[str, Path]] = field(default_factory=dict)
    conflicts: list[AutolinkError] = field(default_factory=list)

    def add(self, entry: PackageEntry) -> bool:
        """Register a package entry.

        Args:
            entry: Package found through a manifest

        Returns:
            False if the pair was already registered at a different path
            (the existing path is kept), True otherwise
        """
        return self._register(entry.name, entry.version, entry.source_path)

    def merge(self, other: "VersionRegistry") -> None:
        """Merge another registry into this one, keeping existing mappings."""
        for name, versions in other.packages.items():
            for version, source_path in versions.items():
                self._register(name, version, source_path)

    def _register(self, name: str, version: str, source_path: Path) -> bool:
        versions = self.packages.setdefault(name, {})
        current = versions.get(version)
        if current is None:
            versions[version] = source_path
            return True
        if current == source_path:
            return True

        conflict = AutolinkError(
            ErrorKind.VERSION_CONFLICT,
            f"Version conflict for {name}@{version}: {current} and {source_path}",
            path=source_path,
        )
        self.conflicts.append(conflict)
        logger.warning("%s (keeping %s)", conflict, current)
        return False

    def versions(self, name: str) -> list[str]:
        return list(self.packages.get(name, {}))

    def source_path(self, name: str, version: str) -> Path:
        return self.packages[name][version]

    def entries(self) -> list[PackageEntry]:
        """All registered packages, sorted by name."""
        return [
            PackageEntry(name=name, version=version, source_path=path)
            for name in sorted(self.packages)
            for version, path in self.packages[name].items()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def __len__(self) -> int:
        return sum(len(versions) for versions in self.packages.values())
