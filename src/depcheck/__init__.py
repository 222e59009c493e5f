"""depcheck — Go package dependency graph builder."""

__version__ = "0.1.0"
