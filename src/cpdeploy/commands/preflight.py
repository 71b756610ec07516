"""Command: host preflight checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpCommand

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.command(cls=CpCommand)
@click.pass_obj
def preflight(app: AppContext) -> None:
    """Check that cpdeploy runs as root on a CloudPanel server."""
    from cpdeploy.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.server).preflight())
