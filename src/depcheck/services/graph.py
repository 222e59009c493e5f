"""GraphService — load packages, build the dependency graph, serialize it.

Packages come either from a saved ``go list -json`` stream passed in by
the caller or from running the collector in the project root or a directory the
caller names.
Configured roots and excludes are extended by per-call values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from depcheck.domain.errors import CollectorError, GraphBuildError, PackageListError
from depcheck.infrastructure.golist import collect_packages, parse_package_stream
from depcheck.infrastructure.graph.engine import DependencyGraph, build_graph
from depcheck.infrastructure.graph.serialize import to_dot, to_json
from depcheck.services.result import ServiceResult

if TYPE_CHECKING:
    from depcheck.config.settings import DepcheckSettings
    from depcheck.domain.packages import PackageList

logger = logging.getLogger(__name__)

GRAPH_FORMATS = ("dot", "json")


def _merge(configured: Iterable[str], extra: Iterable[str]) -> list[str]:
    """Concatenate two name lists, dropping repeats but keeping order."""
    return list(dict.fromkeys([*configured, *extra]))


class GraphService:
    """Build and export package dependency graphs."""

    def __init__(self, settings: DepcheckSettings) -> None:
        self._settings = settings

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _load(self, input_text: str | None, directory: Path | None) -> PackageList:
        if input_text is not None:
            return parse_package_stream(input_text)
        collect = self._settings.collect
        return collect_packages(
            directory or self._settings.project_root,
            go_binary=collect.go_binary,
            patterns=collect.patterns,
            tags=collect.tags,
            timeout=collect.timeout,
        )

    def _build(
        self,
        op: str,
        input_text: str | None,
        roots: Sequence[str],
        excludes: Sequence[str],
        directory: Path | None,
    ) -> tuple[PackageList, DependencyGraph, dict[str, Any]] | ServiceResult:
        """Load and build, returning packages, graph and a summary, or a failed result."""
        try:
            packages = self._load(input_text, directory)
        except PackageListError as exc:
            return ServiceResult.failure(op, "INVALID_PACKAGES", str(exc))
        except CollectorError as exc:
            return ServiceResult.failure(op, "COLLECT_FAILED", str(exc), stderr=exc.stderr)

        all_roots = _merge(self._settings.graph.roots, roots)
        all_excludes = _merge(self._settings.graph.excludes, excludes)
        try:
            graph = build_graph(packages, all_roots, all_excludes)
        except GraphBuildError as exc:
            logger.debug("Root not found: %s", exc.root)
            return ServiceResult.failure(op, "ROOT_NOT_FOUND", str(exc), root=exc.root)

        summary: dict[str, Any] = {
            "package_count": len(packages),
            "node_count": len(graph),
            "edge_count": graph.number_of_edges(),
            "roots": all_roots,
            "excludes": all_excludes,
        }
        return packages, graph, summary

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def build(
        self,
        *,
        input_text: str | None = None,
        roots: Sequence[str] = (),
        excludes: Sequence[str] = (),
        directory: Path | None = None,
        fmt: str | None = None,
    ) -> ServiceResult:
        """Build the graph and serialize it.

        Returns the serialized graph in ``data["content"]`` along with node
        and edge counts.
        """
        op = "build_graph"
        fmt = (fmt or self._settings.output.format).lower()
        if fmt not in GRAPH_FORMATS:
            return ServiceResult.failure(
                op,
                "INVALID_FORMAT",
                f"Unknown graph format: {fmt}",
                format=fmt,
                valid=list(GRAPH_FORMATS),
            )

        built = self._build(op, input_text, roots, excludes, directory)
        if isinstance(built, ServiceResult):
            return built
        _packages, graph, summary = built

        if fmt == "dot":
            content = to_dot(graph, rankdir=self._settings.output.rankdir)
        else:
            content = to_json(graph)

        return ServiceResult(
            ok=True,
            op=op,
            data={"format": fmt, "content": content, **summary},
        )

    def check(
        self,
        *,
        input_text: str | None = None,
        roots: Sequence[str] = (),
        excludes: Sequence[str] = (),
        directory: Path | None = None,
    ) -> ServiceResult:
        """Build the graph only to validate roots and report its size.

        Excludes that name no package in the input are reported as warnings.
        """
        op = "check_graph"
        built = self._build(op, input_text, roots, excludes, directory)
        if isinstance(built, ServiceResult):
            return built
        packages, _graph, summary = built

        known = packages.by_import_path()
        warnings = [
            f"Exclude '{name}' matched no package"
            for name in summary["excludes"]
            if name not in known
        ]
        return ServiceResult(ok=True, op=op, data=summary, warnings=warnings)
