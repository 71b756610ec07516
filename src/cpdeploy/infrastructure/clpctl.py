"""Thin wrapper around CloudPanel's ``clpctl`` command-line tool.

Every control-plane operation shells out to ``clpctl`` with captured
output.  Failures surface as :class:`ControlPlaneError`; nothing here
retries.

Certificate installs are the one exception: ``clpctl`` reports rate
limiting only in its text output, so :func:`classify_certificate_output`
sniffs the captured text and maps it to a :class:`CertificateOutcome`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass

from cpdeploy.domain.types import CertificateOutcome

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("Too Many Requests", "rateLimited")
_ERROR_MARKER = "error"


class ControlPlaneError(RuntimeError):
    """A ``clpctl`` invocation could not run or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str],
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


@dataclass(frozen=True)
class CertificateResult:
    """Outcome of a certificate request plus the raw ``clpctl`` output."""

    outcome: CertificateOutcome
    output: str = ""


def classify_certificate_output(returncode: int, output: str) -> CertificateOutcome:
    """Map ``lets-encrypt:install:certificate`` output to an outcome."""
    if any(marker in output for marker in _RATE_LIMIT_MARKERS):
        return CertificateOutcome.RATE_LIMITED
    if returncode != 0 or _ERROR_MARKER in output:
        return CertificateOutcome.FAILED
    return CertificateOutcome.INSTALLED


class ControlPlane:
    """Runs ``clpctl`` subcommands and interprets their output."""

    def __init__(self, binary: str = "clpctl", *, timeout: float | None = 300.0) -> None:
        self._binary = binary
        self._timeout = timeout

    @property
    def binary(self) -> str:
        return self._binary

    def is_available(self) -> bool:
        """Whether the ``clpctl`` binary can be found on PATH."""
        return shutil.which(self._binary) is not None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_sites(self) -> str:
        return self._run("site:list").stdout

    def site_listed(self, domain: str) -> bool:
        """Whether *domain* appears in ``clpctl site:list``.

        A failing ``site:list`` counts as not listed.
        """
        try:
            return domain in self.list_sites()
        except ControlPlaneError as exc:
            logger.debug("site:list failed: %s", exc)
            return False

    def list_vhost_templates(self) -> str:
        return self._run("vhost-templates:list").stdout

    def vhost_template_exists(self, name: str) -> bool:
        """Whether *name* is a row in the ``vhost-templates:list`` table."""
        prefix = f"| {name} "
        return any(line.startswith(prefix) for line in self.list_vhost_templates().splitlines())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_php_site(
        self,
        *,
        domain: str,
        php_version: str,
        vhost_template: str,
        site_user: str,
        site_password: str,
    ) -> None:
        self._run(
            "site:add:php",
            f"--domainName={domain}",
            f"--phpVersion={php_version}",
            f"--vhostTemplate={vhost_template}",
            f"--siteUser={site_user}",
            f"--siteUserPassword={site_password}",
            redact=site_password,
        )

    def add_database(
        self,
        *,
        domain: str,
        database_name: str,
        database_user: str,
        database_password: str,
    ) -> None:
        self._run(
            "db:add",
            f"--domainName={domain}",
            f"--databaseName={database_name}",
            f"--databaseUserName={database_user}",
            f"--databaseUserPassword={database_password}",
            redact=database_password,
        )

    def install_certificate(self, domain: str) -> CertificateResult:
        """Request a Let's Encrypt certificate. Never raises on a failed request."""
        try:
            proc = self._run(
                "lets-encrypt:install:certificate",
                f"--domainName={domain}",
                check=False,
            )
        except ControlPlaneError as exc:
            return CertificateResult(CertificateOutcome.FAILED, str(exc))
        outcome = classify_certificate_output(proc.returncode, proc.stdout)
        return CertificateResult(outcome, proc.stdout.strip())

    def delete_site(self, domain: str) -> None:
        self._run("site:delete", f"--domainName={domain}", "--force")

    # ------------------------------------------------------------------
    # Subprocess helper
    # ------------------------------------------------------------------

    def _run(
        self,
        *args: str,
        check: bool = True,
        redact: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``clpctl`` with stderr folded into stdout."""
        command = [self._binary, *args]
        shown = " ".join(command)
        if redact:
            shown = shown.replace(redact, "********")
        logger.debug("Running %s", shown)
        try:
            proc = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ControlPlaneError(f"{args[0]} could not run: {exc}", command=command[:2]) from exc

        if check and proc.returncode != 0:
            output = proc.stdout.strip()
            if redact:
                output = output.replace(redact, "********")
            raise ControlPlaneError(
                f"{args[0]} exited with status {proc.returncode}",
                command=command[:2],
                returncode=proc.returncode,
                output=output,
            )
        return proc
