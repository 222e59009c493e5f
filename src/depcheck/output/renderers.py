"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from depcheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from depcheck.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="dep.ok"), Text(f"  {result.op}", style="dep.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dep.key")
    if key.endswith("_count"):
        v = Text(str(value), style="dep.count")
    elif key == "output_file":
        v = Text(str(value), style="dim")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _name_table(title: str, names: list[str]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column(title, style="dep.pkg", no_wrap=True)
    for name in names:
        table.add_row(name)
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dep.error")
    op = Text(f"  {result.op}", style="dep.op")
    console.print(label, op, "—", Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_graph_summary(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render build/check summaries: counts, then roots and excludes."""
    _status_line(console, result)
    for key in ("format", "output_file", "package_count", "node_count", "edge_count"):
        if key in result.data:
            _field(console, key, result.data[key])

    roots = result.data.get("roots") or []
    excludes = result.data.get("excludes") or []
    if verbose and roots:
        console.print()
        console.print(_name_table("Root", roots))
    if verbose and excludes:
        console.print()
        console.print(_name_table("Excluded", excludes))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "build_graph": _render_graph_summary,
    "check_graph": _render_graph_summary,
}
