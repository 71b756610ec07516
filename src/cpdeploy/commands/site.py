"""Command group: existing site inspection and removal."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpGroup

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.group(
    cls=CpGroup,
    examples="""\
  cpdeploy site exists www.example.com
  cpdeploy site delete staging.example.com --yes""",
)
def site() -> None:
    """Inspect or remove sites on this server."""


@site.command()
@click.argument("domain_name")
@click.pass_obj
def exists(app: AppContext, domain_name: str) -> None:
    """Report whether DOMAIN_NAME is already deployed."""
    from cpdeploy.services.site import SiteService

    app.emit(SiteService(app.server).exists(domain_name))


@site.command()
@click.argument("domain_name")
@click.option("--yes", "-y", is_flag=True, help="Delete without confirmation.")
@click.pass_obj
def delete(app: AppContext, domain_name: str, yes: bool) -> None:
    """Force-delete DOMAIN_NAME through clpctl."""
    from cpdeploy.services.site import SiteService

    if not yes:
        if not app.interactive:
            app.fail(
                "delete_site",
                "ABORTED",
                "Refusing to delete without --yes",
                domain=domain_name,
            )
        click.confirm(f"Delete site {domain_name} and all its data?", abort=True, err=True)
    app.emit(SiteService(app.server).delete(domain_name))
