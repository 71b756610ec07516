"""SiteService — existing-site detection, deletion, and deployment.

A deployment runs four control-plane steps in order: create the PHP
site, create its database, request a certificate, then write the
credentials file.  Site and database failures stop the deployment; a
rate-limited or failed certificate only adds a warning, since it can be
installed later with ``clpctl lets-encrypt:install:certificate``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cpdeploy.domain.models import SiteCredentials
from cpdeploy.domain.sites import InvalidDomainError, derive_site_identifier, validate_domain
from cpdeploy.domain.types import CertificateOutcome
from cpdeploy.infrastructure.clpctl import ControlPlaneError
from cpdeploy.services._helpers import error_detail, now_local
from cpdeploy.services.base import BaseService
from cpdeploy.services.result import ServiceResult, failure
from cpdeploy.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from cpdeploy.domain.models import DeployRequest

logger = logging.getLogger(__name__)


def certificate_hint(domain: str) -> str:
    """Command an operator can run later to install the certificate."""
    return f"clpctl lets-encrypt:install:certificate --domainName={domain}"


class SiteService(BaseService):
    """Site lifecycle operations against the control plane."""

    @traced
    def exists(self, domain: str) -> ServiceResult:
        """Report whether *domain* is already deployed on this server.

        A site exists when ``clpctl site:list`` mentions it or any of its
        nginx vhost, certificate directory, or document root is on disk.
        """
        op = "site_exists"
        try:
            domain = validate_domain(domain)
        except InvalidDomainError as exc:
            return failure(op, "INVALID_DOMAIN", str(exc), domain=domain)

        site_user = derive_site_identifier(domain)
        listed = self._server.control_plane.site_listed(domain)
        artifacts = [str(p) for p in self._server.site_artifacts(domain, site_user)]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": domain,
                "site_user": site_user,
                "exists": listed or bool(artifacts),
                "listed": listed,
                "artifacts": artifacts,
            },
        )

    @traced
    def delete(self, domain: str) -> ServiceResult:
        """Force-delete *domain* through the control plane."""
        op = "delete_site"
        try:
            domain = validate_domain(domain)
        except InvalidDomainError as exc:
            return failure(op, "INVALID_DOMAIN", str(exc), domain=domain)

        logger.info("Deleting existing site %s", domain)
        try:
            self._server.control_plane.delete_site(domain)
        except ControlPlaneError as exc:
            return failure(
                op,
                "SITE_DELETE_FAILED",
                f"Failed to delete existing site: {domain}",
                **error_detail(exc),
            )
        return ServiceResult(ok=True, op=op, data={"domain": domain, "deleted": True})

    @traced
    def deploy(self, request: DeployRequest) -> ServiceResult:
        """Create the site, its database, certificate, and credentials file."""
        op = "deploy_site"
        server = self._server
        control_plane = server.control_plane
        warnings: list[str] = []

        site_password = server.generate_password()
        database_password = server.generate_password()

        logger.info("Creating site %s as %s", request.domain, request.site_user)
        with trace_span("site_add"):
            try:
                control_plane.add_php_site(
                    domain=request.domain,
                    php_version=request.php_version,
                    vhost_template=request.vhost_template,
                    site_user=request.site_user,
                    site_password=site_password,
                )
            except ControlPlaneError as exc:
                return failure(
                    op,
                    "SITE_CREATE_FAILED",
                    "Failed to create site",
                    **error_detail(exc),
                )

        logger.info("Creating database %s", request.database_name)
        with trace_span("db_add"):
            try:
                control_plane.add_database(
                    domain=request.domain,
                    database_name=request.database_name,
                    database_user=request.database_user,
                    database_password=database_password,
                )
            except ControlPlaneError as exc:
                return failure(
                    op,
                    "DATABASE_CREATE_FAILED",
                    "Failed to create database",
                    **error_detail(exc),
                )

        certificate = self._install_certificate(request, warnings)

        ipv4, ipv6 = server.public_ips()
        creds = SiteCredentials(
            domain=request.domain,
            site_user=request.site_user,
            site_password=site_password,
            database_name=request.database_name,
            database_user=request.database_user,
            database_password=database_password,
            database_host=server.settings.credentials.database_host,
            database_port=server.settings.credentials.database_port,
            server_ipv4=ipv4,
            server_ipv6=ipv6,
            installed_at=now_local(),
            home_root=str(server.settings.paths.home_root),
        )
        with trace_span("credentials"):
            owner = request.site_user if server.is_root() else None
            try:
                path = server.write_credentials(creds, owner=owner)
            except (OSError, LookupError) as exc:
                return failure(
                    op,
                    "CREDENTIALS_WRITE_FAILED",
                    f"Failed to write credentials file: {exc}",
                    path=str(server.credentials_path(request.site_user)),
                )

        logger.info("Site %s deployed", request.domain)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": request.domain,
                "url": creds.url,
                "site_user": request.site_user,
                "database_name": request.database_name,
                "database_user": request.database_user,
                "php_version": request.php_version,
                "vhost_template": request.vhost_template,
                "certificate": str(certificate),
                "document_root": creds.document_root,
                "credentials_path": str(path),
                "credentials": {
                    "site_password": site_password,
                    "database_host": creds.database_host,
                    "database_port": creds.database_port,
                    "database_password": database_password,
                    "server_ipv4": ipv4,
                    "server_ipv6": ipv6,
                    "installed_at": creds.installed_at,
                },
            },
            warnings=warnings,
        )

    def _install_certificate(
        self,
        request: DeployRequest,
        warnings: list[str],
    ) -> CertificateOutcome:
        if not request.install_ssl:
            logger.info("Skipping SSL certificate installation (user requested)")
            return CertificateOutcome.SKIPPED

        logger.info("Installing SSL certificate for %s", request.domain)
        with trace_span("certificate") as span:
            result = self._server.control_plane.install_certificate(request.domain)
            if span is not None:
                span.annotate("outcome", str(result.outcome))

        hint = certificate_hint(request.domain)
        if result.outcome is CertificateOutcome.RATE_LIMITED:
            logger.warning("Let's Encrypt rate limit reached for %s", request.domain)
            warnings.append(
                "SSL certificate skipped due to Let's Encrypt rate limit; "
                f"retry within 12-36 hours with: {hint}"
            )
        elif result.outcome is CertificateOutcome.FAILED:
            logger.warning("SSL certificate installation failed for %s", request.domain)
            warnings.append(
                f"SSL certificate installation failed: {result.output}; retry with: {hint}"
            )
        return result.outcome
