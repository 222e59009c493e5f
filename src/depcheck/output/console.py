"""Rich Console factory and theme for depcheck output.

Consoles render to a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEPCHECK_THEME = Theme(
    {
        "dep.ok": "bold green",
        "dep.error": "bold red",
        "dep.warning": "bold yellow",
        "dep.op": "bold cyan",
        "dep.key": "dim",
        "dep.pkg": "bold blue",
        "dep.count": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=DEPCHECK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
