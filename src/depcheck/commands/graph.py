"""Command group: build and check package dependency graphs."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import IO, TYPE_CHECKING

import click

from depcheck.commands._base import DepGroup
from depcheck.services.graph import GRAPH_FORMATS, GraphService
from depcheck.services.result import ServiceResult

if TYPE_CHECKING:
    from depcheck.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  depcheck graph build
  depcheck graph build --root github.com/org/repo/cmd/server | dot -Tpng -o deps.png
  go list -json ./... | depcheck graph build --input - --format json
  depcheck graph check --root github.com/org/repo/cmd/server"""


def _source_options[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Apply the shared package-source, root, and exclude flags."""
    func = click.option(
        "--exclude",
        "excludes",
        multiple=True,
        help="Import path to leave out of the graph (repeatable).",
    )(func)
    func = click.option(
        "--root",
        "roots",
        multiple=True,
        help="Import path that must exist in the graph (repeatable).",
    )(func)
    func = click.option(
        "--dir",
        "directory",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Directory to run go list in (default: project root).",
    )(func)
    func = click.option(
        "--input",
        "input_file",
        type=click.File("r", encoding="utf-8"),
        default=None,
        help="Saved 'go list -json' output ('-' for stdin). Runs go list when omitted.",
    )(func)
    return func


def _read(input_file: IO[str] | None) -> str | None:
    return input_file.read() if input_file is not None else None


@click.group(cls=DepGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Build and validate package dependency graphs."""


@graph.command(
    examples="""\
  depcheck graph build
  depcheck graph build --format json --output deps.json
  depcheck graph build --exclude github.com/org/repo/internal/testutil
  go list -json ./... | depcheck graph build --input -"""
)
@_source_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(GRAPH_FORMATS, case_sensitive=False),
    default=None,
    help="Graph output format (default from config, else dot).",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def build(
    app: AppContext,
    input_file: IO[str] | None,
    directory: Path | None,
    roots: tuple[str, ...],
    excludes: tuple[str, ...],
    fmt: str | None,
    output_file: str | None,
) -> None:
    """Build the dependency graph in DOT or JSON format."""
    result = GraphService(app.settings).build(
        input_text=_read(input_file),
        roots=roots,
        excludes=excludes,
        directory=directory,
        fmt=fmt,
    )

    if not result.ok or (app.settings.json_output and not output_file):
        app.emit(result)
        return

    if output_file:
        Path(output_file).write_text(result.data["content"], encoding="utf-8")
        summary = {k: v for k, v in result.data.items() if k != "content"}
        app.emit(
            ServiceResult(
                ok=True,
                op="build_graph",
                data={**summary, "output_file": output_file},
            )
        )
    else:
        # Pipe-friendly: raw graph to stdout
        click.echo(result.data["content"], nl=False)


@graph.command(
    examples="""\
  depcheck graph check --root github.com/org/repo/cmd/server
  depcheck --json graph check --input packages.json"""
)
@_source_options
@click.pass_obj
def check(
    app: AppContext,
    input_file: IO[str] | None,
    directory: Path | None,
    roots: tuple[str, ...],
    excludes: tuple[str, ...],
) -> None:
    """Verify that every root resolves to a package in the graph."""
    app.emit(
        GraphService(app.settings).check(
            input_text=_read(input_file),
            roots=roots,
            excludes=excludes,
            directory=directory,
        )
    )
