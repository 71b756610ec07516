"""Server — the single dependency injected into every service.

Wraps the host a deployment runs on: the ``clpctl`` control plane, the
filesystem layout from ``[paths]``, public IP discovery, and DNS.  Public
IPs are looked up at most once per Server instance.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from cpdeploy.domain.models import credentials_path
from cpdeploy.infrastructure.clpctl import ControlPlane
from cpdeploy.infrastructure.filesystem import (
    find_site_artifacts,
    list_php_versions,
    write_private_file,
)
from cpdeploy.infrastructure.network import fetch_public_ip, resolve_address
from cpdeploy.infrastructure.passwords import generate_password
from cpdeploy.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from cpdeploy.config.settings import CpSettings
    from cpdeploy.domain.models import SiteCredentials

logger = logging.getLogger(__name__)

CREDENTIALS_TEMPLATE = "site_credentials.txt.j2"


class Server:
    """Access to the CloudPanel host for one CLI invocation."""

    def __init__(
        self,
        settings: CpSettings,
        *,
        control_plane: ControlPlane | None = None,
    ) -> None:
        self.settings = settings
        self._control_plane = control_plane
        self._public_ips: tuple[str | None, str | None] | None = None

    @property
    def control_plane(self) -> ControlPlane:
        """The ``clpctl`` wrapper (created lazily on first access)."""
        if self._control_plane is None:
            cfg = self.settings.control_plane
            self._control_plane = ControlPlane(cfg.binary, timeout=cfg.timeout)
        return self._control_plane

    # ------------------------------------------------------------------
    # Host facts
    # ------------------------------------------------------------------

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def php_versions(self) -> list[str]:
        return list_php_versions(self.settings.paths.php_root)

    def public_ips(self) -> tuple[str | None, str | None]:
        """``(ipv4, ipv6)`` of this host; either may be None."""
        if self._public_ips is None:
            net = self.settings.network
            ipv4 = fetch_public_ip(net.ipv4_url, timeout=net.timeout)
            ipv6 = fetch_public_ip(net.ipv6_url, timeout=net.timeout)
            logger.debug("Public IPs: ipv4=%s ipv6=%s", ipv4, ipv6)
            self._public_ips = (ipv4, ipv6)
        return self._public_ips

    def resolve(self, domain: str) -> str | None:
        return resolve_address(domain, lifetime=self.settings.network.timeout)

    # ------------------------------------------------------------------
    # Sites
    # ------------------------------------------------------------------

    def site_artifacts(self, domain: str, site_user: str) -> list[Path]:
        paths = self.settings.paths
        return find_site_artifacts(
            domain,
            site_user,
            home_root=paths.home_root,
            nginx_sites_enabled=paths.nginx_sites_enabled,
            letsencrypt_live=paths.letsencrypt_live,
        )

    def generate_password(self) -> str:
        return generate_password(self.settings.credentials.password_length)

    def credentials_path(self, site_user: str) -> Path:
        return credentials_path(
            site_user,
            home_root=self.settings.paths.home_root,
            filename=self.settings.credentials.filename,
        )

    def render_credentials(self, creds: SiteCredentials) -> str:
        override_root = None
        if self.settings.config_path is not None:
            override_root = self.settings.config_path.parent / "templates"
        env = build_template_environment("credentials", override_root=override_root)
        return env.get_template(CREDENTIALS_TEMPLATE).render(creds=creds)

    def write_credentials(self, creds: SiteCredentials, *, owner: str | None) -> Path:
        """Render and write the credentials file; return its path."""
        path = self.credentials_path(creds.site_user)
        write_private_file(path, self.render_credentials(creds), owner=owner)
        return path
