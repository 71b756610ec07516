"""Command group: domain validation and site identifier derivation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpGroup

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.group(
    cls=CpGroup,
    examples="""\
  cpdeploy domain validate www.example.com
  cpdeploy domain derive staging.example.co.uk
  cpdeploy -q domain derive shop.example.com
  cpdeploy --json domain derive example.com""",
)
def domain() -> None:
    """Validate domains and derive site identifiers."""


@domain.command()
@click.argument("name")
@click.pass_obj
def validate(app: AppContext, name: str) -> None:
    """Check that NAME is a syntactically valid domain."""
    from cpdeploy.services.domain import DomainService

    app.emit(DomainService.validate(name))


@domain.command()
@click.argument("name")
@click.pass_obj
def derive(app: AppContext, name: str) -> None:
    """Show the site user and database names derived from NAME."""
    from cpdeploy.services.domain import DomainService

    app.emit(DomainService.derive(name))
