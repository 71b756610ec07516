"""Command group: CloudPanel vhost templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpGroup

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.group(
    cls=CpGroup,
    examples="""\
  cpdeploy templates list
  cpdeploy templates check "Laravel 11"
""",
)
def templates() -> None:
    """Inspect vhost templates known to the control plane."""


@templates.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show every vhost template from ``clpctl vhost-templates:list``."""
    from cpdeploy.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.server).vhost_templates())


@templates.command()
@click.argument("name")
@click.pass_obj
def check(app: AppContext, name: str) -> None:
    """Check that NAME is a known vhost template."""
    from cpdeploy.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.server).check_template(name))
