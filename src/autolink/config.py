"""Configuration passed to every autolink operation."""

from dataclasses import dataclass
from pathlib import Path
from typing import Self

MANIFEST_NAME = ".autolink"
DESCRIPTOR_NAME = "package.json"
MODULES_DIR_NAME = "node_modules"
IGNORED_DIRS = ("node_modules", "bower_components")
BACKUP_SUFFIX = ".bak"


@dataclass(frozen=True)
class Settings:
    """Where autolink looks and where it writes."""

    project_dir: Path  # Directory holding the target project's descriptor
    modules_dir: Path  # Installed-packages directory
    manifest_name: str = MANIFEST_NAME
    descriptor_name: str = DESCRIPTOR_NAME
    ignored_dirs: tuple[str, ...] = IGNORED_DIRS
    backup_suffix: str = BACKUP_SUFFIX

    @classmethod
    def for_project(cls, project_dir: Path, modules_dir: Path | None = None) -> Self:
        """Build settings for a project directory.

        Args:
            project_dir: Project directory (will be resolved to absolute)
            modules_dir: Installed-packages directory. If None, uses
                node_modules inside project_dir.
        """
        project_dir = project_dir.resolve()
        if modules_dir is None:
            modules_dir = project_dir / MODULES_DIR_NAME
        return cls(project_dir=project_dir, modules_dir=modules_dir.resolve())

    @property
    def project_descriptor(self) -> Path:
        return self.project_dir / self.descriptor_name

    def installed_path(self, name: str) -> Path:
        """Path of a package inside the installed-packages directory.

        Scoped names (``@scope/name``) land one level down, in the scope
        directory.
        """
        return self.modules_dir.joinpath(*name.split("/"))

    def scope_dir(self, name: str) -> Path:
        """Directory that must exist before ``name`` can be linked."""
        return self.installed_path(name).parent

    def backup_path(self, installed_path: Path) -> Path:
        return installed_path.with_name(installed_path.name + self.backup_suffix)
