"""EnvironmentService — host preflight, PHP runtimes, vhost templates."""

from __future__ import annotations

import logging

from cpdeploy.domain.types import TEMPLATE_MENU
from cpdeploy.infrastructure.clpctl import ControlPlaneError
from cpdeploy.services._helpers import error_detail
from cpdeploy.services.base import BaseService
from cpdeploy.services.result import ServiceResult, failure
from cpdeploy.services.telemetry import traced

logger = logging.getLogger(__name__)


class EnvironmentService(BaseService):
    """Read-only facts about the CloudPanel host."""

    @traced
    def preflight(self) -> ServiceResult:
        """Check the process runs as root and ``clpctl`` is installed."""
        op = "preflight"
        if not self._server.is_root():
            return failure(op, "NOT_ROOT", "Please run as root")
        control_plane = self._server.control_plane
        if not control_plane.is_available():
            return failure(
                op,
                "CLPCTL_MISSING",
                "CloudPanel is not installed",
                binary=control_plane.binary,
            )
        return ServiceResult(ok=True, op=op, data={"root": True, "clpctl": control_plane.binary})

    @traced
    def php_versions(self) -> ServiceResult:
        """List installed PHP versions, newest first."""
        op = "php_versions"
        php_root = self._server.settings.paths.php_root
        versions = self._server.php_versions()
        if not versions:
            return failure(
                op,
                "NO_PHP_VERSIONS",
                f"No PHP versions found under {php_root}",
                php_root=str(php_root),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "latest": versions[0],
                "count": len(versions),
                "items": [{"index": i, "version": v} for i, v in enumerate(versions, 1)],
            },
        )

    @traced
    def vhost_templates(self) -> ServiceResult:
        """Return the raw ``clpctl vhost-templates:list`` table."""
        op = "vhost_templates"
        try:
            listing = self._server.control_plane.list_vhost_templates()
        except ControlPlaneError as exc:
            return failure(op, "CONTROL_PLANE_ERROR", str(exc), **error_detail(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "builtin": [str(t) for t in TEMPLATE_MENU.values()],
                "listing": listing.rstrip("\n"),
            },
        )

    @traced
    def check_template(self, name: str) -> ServiceResult:
        """Confirm *name* is a vhost template known to the control plane."""
        op = "check_template"
        try:
            known = self._server.control_plane.vhost_template_exists(name)
        except ControlPlaneError as exc:
            return failure(op, "CONTROL_PLANE_ERROR", str(exc), **error_detail(exc))
        if not known:
            return failure(op, "INVALID_TEMPLATE", f"Invalid template name: {name}", name=name)
        return ServiceResult(ok=True, op=op, data={"name": name})
