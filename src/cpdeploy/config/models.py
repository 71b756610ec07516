"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cpdeploy.toml only contains
overrides.  A stock CloudPanel server needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- cpdeploy.toml sections ---


class ControlPlaneConfig(BaseModel):
    """[control_plane] section."""

    model_config = {"frozen": True}

    binary: str = "clpctl"
    timeout: float = 300.0


class PathsConfig(BaseModel):
    """[paths] section."""

    model_config = {"frozen": True}

    php_root: Path = Path("/etc/php")
    home_root: Path = Path("/home")
    nginx_sites_enabled: Path = Path("/etc/nginx/sites-enabled")
    letsencrypt_live: Path = Path("/etc/letsencrypt/live")


class CredentialsConfig(BaseModel):
    """[credentials] section."""

    model_config = {"frozen": True}

    filename: str = "site_credentials.txt"
    password_length: int = Field(default=24, ge=8)
    database_host: str = "127.0.0.1"
    database_port: int = 3306


class NetworkConfig(BaseModel):
    """[network] section."""

    model_config = {"frozen": True}

    ipv4_url: str = "https://api.ipify.org"
    ipv6_url: str = "https://api6.ipify.org"
    timeout: float = 5.0


class DefaultsConfig(BaseModel):
    """[defaults] section."""

    model_config = {"frozen": True}

    vhost_template: str = "WordPress"
    install_ssl: bool = True
