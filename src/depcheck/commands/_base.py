"""Click command and group classes taking an ``examples`` text.

``--examples`` prints that text and exits, keeping ``--help`` concise.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(_examples_option(examples))


class DepCommand(_ExamplesMixin, click.Command):
    """Command with an optional ``--examples`` flag."""


class DepGroup(_ExamplesMixin, click.Group):
    """Group with an optional ``--examples`` flag; subcommands are DepCommands."""

    command_class = DepCommand
