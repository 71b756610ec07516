"""Click base classes that carry usage examples.

``--help`` stays short; ``--examples`` prints the command's example
invocations and exits.  Commands without examples get no flag.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class ExamplesMixin:
    """Adds an eager ``--examples`` flag when ``examples=`` text is given."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)


class CpCommand(ExamplesMixin, click.Command):
    """Command accepting ``examples=``."""


class CpGroup(ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands are :class:`CpCommand`."""

    command_class = CpCommand
