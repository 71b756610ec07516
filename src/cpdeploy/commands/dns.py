"""Command group: DNS checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cpdeploy.commands._base import CpGroup

if TYPE_CHECKING:
    from cpdeploy.commands._context import AppContext


@click.group(cls=CpGroup)
def dns() -> None:
    """Check DNS records against this server."""


@dns.command(
    examples="""\
  cpdeploy dns check www.example.com
  cpdeploy --json dns check example.com""",
)
@click.argument("domain_name")
@click.pass_obj
def check(app: AppContext, domain_name: str) -> None:
    """Check that DOMAIN_NAME resolves to this server's public IP."""
    from cpdeploy.services.dns import DnsService
    from cpdeploy.services.domain import DomainService

    validated = DomainService.validate(domain_name)
    if not validated.ok:
        app.emit(validated)
    app.emit(DnsService(app.server).check(validated.data["domain"]))
