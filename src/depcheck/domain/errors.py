"""Exception hierarchy for depcheck.

Services convert these into ``ServiceResult`` errors; nothing above the
service layer should need to catch them.
"""

from __future__ import annotations


class DepcheckError(Exception):
    """Base class for all depcheck errors."""


class PackageListError(DepcheckError):
    """The package metadata stream could not be decoded or validated."""


class CollectorError(DepcheckError):
    """Running the package-listing tool failed."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class GraphBuildError(DepcheckError):
    """A requested root has no node in the constructed graph."""

    def __init__(self, root: str) -> None:
        super().__init__(f"no corresponding node found for the root name {root!r}")
        self.root = root
