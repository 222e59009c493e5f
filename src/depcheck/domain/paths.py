"""Import path classification and display labels.

Pure functions over strings, no graph or infrastructure dependencies.
Consumed by the graph builder for both package paths and import lists.
"""

from __future__ import annotations

VENDOR_SEGMENT = "vendor"
_VENDOR_PREFIX = f"{VENDOR_SEGMENT}/"

# A repo path looks like ``domain.tld/org/repo[/...]``.
MIN_REPO_SEGMENTS = 3


def is_valid_repo_path(path: str) -> bool:
    """Check whether *path* names a package that can live in a repository.

    Valid paths have at least three ``/``-separated segments and a first
    segment containing a dot (a registrable domain such as ``github.com``).
    Standard-library imports (``fmt``, ``encoding/json``) and malformed
    paths fail the check.
    """
    segments = path.split("/")
    if len(segments) < MIN_REPO_SEGMENTS:
        return False
    return "." in segments[0]


def is_vendored(path: str) -> bool:
    """Check whether *path* has a ``vendor`` segment followed by a non-empty remainder."""
    segments = path.split("/")
    if VENDOR_SEGMENT not in segments[:-1]:
        return False
    return path.rpartition(_VENDOR_PREFIX)[2] != ""


def label_for(import_path: str) -> str:
    """Return the display label for *import_path*.

    Vendored paths are labelled by the vendored package's own path, i.e.
    everything after the last ``vendor/``. Any other path is returned
    unchanged.
    """
    if not is_vendored(import_path):
        return import_path
    _, _, vendored = import_path.rpartition(_VENDOR_PREFIX)
    return vendored
