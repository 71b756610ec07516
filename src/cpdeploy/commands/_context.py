"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Server initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

import click

from cpdeploy.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cpdeploy.config.settings import CpSettings
    from cpdeploy.infrastructure.server import Server
    from cpdeploy.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The server is lazily
    initialized on first use so ``--help`` and ``--version`` never touch
    the host.
    """

    def __init__(self, settings: CpSettings) -> None:
        self.settings = settings
        self._server: Server | None = None

        # Configure structured logging
        from cpdeploy.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from cpdeploy.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def server(self) -> Server:
        """The server instance (created lazily on first access)."""
        if self._server is None:
            from cpdeploy.infrastructure.server import Server

            self._server = Server(self.settings)
        return self._server

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def fail(self, op: str, code: str, message: str, **detail: Any) -> NoReturn:
        """Emit a failed ServiceResult and exit with code 1."""
        from cpdeploy.services.result import failure

        self.emit(failure(op, code, message, **detail))
        raise SystemExit(1)

    def show(self, result: ServiceResult) -> None:
        """Render an intermediate result to stderr without exiting.

        Used by interactive flows to explain a failed check before
        prompting the operator.  Always the human rendering: the operator
        needs the DNS records table even when stdout is ``--json`` or ``-q``.
        """
        from cpdeploy.output.renderers import render_result

        click.echo(render_result(result, verbose=self.settings.verbose), err=True)

    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
