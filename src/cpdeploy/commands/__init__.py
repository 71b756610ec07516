"""Subcommand modules for cpdeploy.

Provides register_commands() which uses deferred imports to keep
``cpdeploy --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    5 groups (have subcommands) + 2 standalone commands.
    """
    # --- Groups ---
    from cpdeploy.commands.dns import dns
    from cpdeploy.commands.domain import domain
    from cpdeploy.commands.php import php
    from cpdeploy.commands.site import site
    from cpdeploy.commands.templates import templates

    cli.add_command(domain)
    cli.add_command(php)
    cli.add_command(templates)
    cli.add_command(dns)
    cli.add_command(site)

    # --- Standalone commands ---
    from cpdeploy.commands.deploy import deploy
    from cpdeploy.commands.preflight import preflight

    cli.add_command(deploy)
    cli.add_command(preflight)
