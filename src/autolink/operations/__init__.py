"""High-level operations for autolink."""

from autolink.operations.discover import discover_registry
from autolink.operations.inventory import list_links
from autolink.operations.link import link_matches
from autolink.operations.link import link_modules
from autolink.operations.match import compute_matches
from autolink.operations.match import load_dependencies
from autolink.operations.match import match_dependencies
from autolink.operations.unlink import remove_links

__all__ = [
    "compute_matches",
    "discover_registry",
    "link_matches",
    "link_modules",
    "list_links",
    "load_dependencies",
    "match_dependencies",
    "remove_links",
]
