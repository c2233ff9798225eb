"""Filesystem operations for autolink."""

from autolink.files.descriptor import load_descriptor
from autolink.files.descriptor import read_package_entry
from autolink.files.discover import ancestor_dirs
from autolink.files.discover import expand_pattern
from autolink.files.discover import read_manifest
from autolink.files.symlinks import TargetKind
from autolink.files.symlinks import inspect_target
from autolink.files.symlinks import remove_path

__all__ = [
    "TargetKind",
    "ancestor_dirs",
    "expand_pattern",
    "inspect_target",
    "load_descriptor",
    "read_manifest",
    "read_package_entry",
    "remove_path",
]
