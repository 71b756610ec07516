"""Command group: installed PHP runtimes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpGroup

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.group(cls=CpGroup)
def php() -> None:
    """Inspect installed PHP versions."""


@php.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List installed PHP versions, newest first."""
    from cpdeploy.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.server).php_versions())
