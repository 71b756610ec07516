"""Request-scoped deployment models.

A :class:`DeployRequest` carries every operator choice for one deployment.
It is built once at the CLI boundary and passed down explicitly; nothing
about a deployment lives in module-level state.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, computed_field, field_validator

from cpdeploy.domain.sites import check_site_identifier, derive_site_identifier, validate_domain


class DeployRequest(BaseModel):
    """Operator choices for a single site deployment."""

    model_config = {"frozen": True}

    domain: str
    php_version: str
    vhost_template: str
    install_ssl: bool = True

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        domain = validate_domain(value)
        check_site_identifier(domain)
        return domain

    @computed_field  # type: ignore[prop-decorator]
    @property
    def site_user(self) -> str:
        return derive_site_identifier(self.domain)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_name(self) -> str:
        return self.site_user

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_user(self) -> str:
        return self.site_user


class SiteCredentials(BaseModel):
    """Everything written to the site's credentials file."""

    model_config = {"frozen": True}

    domain: str
    site_user: str
    site_password: str
    database_name: str
    database_user: str
    database_password: str
    database_host: str = "127.0.0.1"
    database_port: int = 3306
    server_ipv4: str | None = None
    server_ipv6: str | None = None
    installed_at: str
    home_root: str = "/home"

    @property
    def url(self) -> str:
        return f"https://{self.domain}"

    @property
    def document_root(self) -> str:
        return str(PurePosixPath(self.home_root, self.site_user, "htdocs", self.domain))


def credentials_path(
    site_user: str,
    *,
    home_root: Path = Path("/home"),
    filename: str = "site_credentials.txt",
) -> Path:
    """Return ``{home_root}/{site_user}/{filename}``."""
    return home_root / site_user / filename
