"""Shared fixtures for autolink tests."""

import pytest

from autolink.config import Settings
from tests.helpers import write_descriptor


@pytest.fixture
def workspace(tmp_path):
    """A directory with an .autolink file and a foo@1.2.0 package."""
    root = tmp_path / "workspace"
    root.mkdir()
    (root / ".autolink").write_text("packages/*/package.json\n")
    write_descriptor(root / "packages" / "foo", name="foo", version="1.2.0")
    return root


@pytest.fixture
def project(workspace):
    """A project inside the workspace depending on foo ^1.0.0."""
    project_dir = workspace / "app"
    write_descriptor(
        project_dir, name="app", version="0.0.1", dependencies={"foo": "^1.0.0"}
    )
    return project_dir


@pytest.fixture
def settings(project):
    return Settings.for_project(project)
