"""Tests for manifest reading and glob expansion."""

from pathlib import Path
from unittest.mock import patch

import pytest

from autolink.exceptions import AutolinkError
from autolink.exceptions import ErrorKind
from autolink.files import ancestor_dirs
from autolink.files import expand_pattern
from autolink.files import read_manifest

IGNORED = ("node_modules", "bower_components")


class TestAncestorDirs:
    """Tests for ancestor_dirs()."""

    def test_starts_with_directory_and_ends_at_root(self, tmp_path):
        """Test that the walk includes the start and the filesystem root."""
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)

        dirs = ancestor_dirs(start)

        assert dirs[0] == start.resolve()
        assert dirs[1] == (tmp_path / "a").resolve()
        assert dirs[-1] == Path("/")

    def test_each_entry_is_parent_of_previous(self, tmp_path):
        """Test that directories are ordered nearest first."""
        dirs = ancestor_dirs(tmp_path)

        for child, parent in zip(dirs, dirs[1:]):
            assert child.parent == parent

    def test_root_yields_only_root(self):
        """Test that the root has no ancestors."""
        assert ancestor_dirs(Path("/")) == [Path("/")]


class TestReadManifest:
    """Tests for read_manifest()."""

    def test_reads_patterns_and_skips_blank_lines(self, tmp_path):
        """Test that each non-blank line becomes a pattern."""
        (tmp_path / ".autolink").write_text(
            "packages/*/package.json\n\n  \nlibs/**/package.json\n"
        )

        manifest = read_manifest(tmp_path, ".autolink")

        assert manifest.directory == tmp_path
        assert manifest.patterns == ["packages/*/package.json", "libs/**/package.json"]

    def test_handles_windows_line_endings(self, tmp_path):
        """Test that CRLF line endings do not leak into patterns."""
        (tmp_path / ".autolink").write_bytes(b"a/package.json\r\nb/package.json\r\n")

        manifest = read_manifest(tmp_path, ".autolink")

        assert manifest.patterns == ["a/package.json", "b/package.json"]

    def test_missing_manifest_is_not_found(self, tmp_path):
        """Test that a missing file is the soft MANIFEST_NOT_FOUND condition."""
        with pytest.raises(AutolinkError) as exc_info:
            read_manifest(tmp_path, ".autolink")

        assert exc_info.value.kind is ErrorKind.MANIFEST_NOT_FOUND

    def test_unreadable_manifest_is_io_failure(self, tmp_path):
        """Test that a manifest that is a directory is a hard failure."""
        (tmp_path / ".autolink").mkdir()

        with pytest.raises(AutolinkError) as exc_info:
            read_manifest(tmp_path, ".autolink")

        assert exc_info.value.kind is ErrorKind.IO_FAILURE


class TestExpandPattern:
    """Tests for expand_pattern()."""

    def test_matches_relative_to_directory(self, tmp_path):
        """Test that patterns are rooted at the manifest directory."""
        (tmp_path / "packages" / "foo").mkdir(parents=True)
        (tmp_path / "packages" / "foo" / "package.json").write_text("{}")
        (tmp_path / "packages" / "bar").mkdir()
        (tmp_path / "packages" / "bar" / "package.json").write_text("{}")

        files = expand_pattern(tmp_path, "packages/*/package.json", IGNORED)

        assert files == [
            tmp_path / "packages" / "bar" / "package.json",
            tmp_path / "packages" / "foo" / "package.json",
        ]
        assert all(f.is_absolute() for f in files)

    def test_recursive_pattern_skips_ignored_dirs(self, tmp_path):
        """Test that node_modules and bower_components are never matched."""
        (tmp_path / "src" / "foo").mkdir(parents=True)
        (tmp_path / "src" / "foo" / "package.json").write_text("{}")
        (tmp_path / "src" / "foo" / "node_modules" / "dep").mkdir(parents=True)
        (tmp_path / "src" / "foo" / "node_modules" / "dep" / "package.json").write_text("{}")
        (tmp_path / "src" / "bower_components" / "ui").mkdir(parents=True)
        (tmp_path / "src" / "bower_components" / "ui" / "package.json").write_text("{}")

        files = expand_pattern(tmp_path, "src/**/package.json", IGNORED)

        assert files == [tmp_path / "src" / "foo" / "package.json"]

    def test_absolute_pattern(self, tmp_path):
        """Test that absolute patterns are used as-is."""
        elsewhere = tmp_path / "elsewhere" / "foo"
        elsewhere.mkdir(parents=True)
        (elsewhere / "package.json").write_text("{}")
        manifest_dir = tmp_path / "manifest"
        manifest_dir.mkdir()

        files = expand_pattern(
            manifest_dir, str(tmp_path / "elsewhere" / "*" / "package.json"), IGNORED
        )

        assert files == [elsewhere / "package.json"]

    def test_directories_are_not_matched(self, tmp_path):
        """Test that only files are returned."""
        (tmp_path / "packages" / "foo").mkdir(parents=True)

        assert expand_pattern(tmp_path, "packages/*", IGNORED) == []

    def test_no_matches(self, tmp_path):
        """Test that an unmatched pattern yields nothing."""
        assert expand_pattern(tmp_path, "nothing/*/package.json", IGNORED) == []

    def test_recursive_pattern_does_not_follow_cross_linked_node_modules(
        self, tmp_path
    ):
        """Test that packages symlinked into each other are not walked."""
        names = ["a", "b", "c"]
        for name in names:
            (tmp_path / name / "node_modules").mkdir(parents=True)
            (tmp_path / name / "package.json").write_text("{}")
        for name in names:
            for other in names:
                if other != name:
                    (tmp_path / name / "node_modules" / other).symlink_to(
                        tmp_path / other
                    )
            (tmp_path / name / "linked").symlink_to(tmp_path)

        with patch(
            "pathlib.Path.iterdir", autospec=True, side_effect=_counting_iterdir
        ) as mock_iterdir:
            files = expand_pattern(tmp_path, "**/package.json", IGNORED)

        assert files == [tmp_path / name / "package.json" for name in names]
        assert mock_iterdir.call_count < 10

    def test_wildcard_follows_symlinked_package_directory(self, tmp_path):
        """Test that a symlinked package is still reached by a * segment."""
        real = tmp_path / "real" / "foo"
        real.mkdir(parents=True)
        (real / "package.json").write_text("{}")
        (tmp_path / "packages").mkdir()
        (tmp_path / "packages" / "foo").symlink_to(real)

        files = expand_pattern(tmp_path, "packages/*/package.json", IGNORED)

        assert files == [tmp_path / "packages" / "foo" / "package.json"]

    def test_parent_relative_pattern(self, tmp_path):
        """Test that patterns may climb out of the manifest directory."""
        (tmp_path / "libs" / "foo").mkdir(parents=True)
        (tmp_path / "libs" / "foo" / "package.json").write_text("{}")
        (tmp_path / "app").mkdir()

        files = expand_pattern(tmp_path / "app", "../libs/*/package.json", IGNORED)

        assert [f.resolve() for f in files] == [
            (tmp_path / "libs" / "foo" / "package.json").resolve()
        ]

    def test_hidden_entries_need_explicit_dot(self, tmp_path):
        """Test that * skips dot directories unless the pattern names them."""
        (tmp_path / ".cache" / "foo").mkdir(parents=True)
        (tmp_path / ".cache" / "foo" / "package.json").write_text("{}")

        assert expand_pattern(tmp_path, "*/foo/package.json", IGNORED) == []
        assert expand_pattern(tmp_path, ".*/foo/package.json", IGNORED) == [
            tmp_path / ".cache" / "foo" / "package.json"
        ]


_real_iterdir = Path.iterdir


def _counting_iterdir(self):
    return _real_iterdir(self)
