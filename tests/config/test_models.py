"""Tests for configuration section models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cpdeploy.config.models import (
    ControlPlaneConfig,
    CredentialsConfig,
    DefaultsConfig,
    NetworkConfig,
    PathsConfig,
)


class TestDefaults:
    def test_control_plane(self) -> None:
        cfg = ControlPlaneConfig()
        assert cfg.binary == "clpctl"
        assert cfg.timeout == 300.0

    def test_paths_match_stock_cloudpanel(self) -> None:
        cfg = PathsConfig()
        assert cfg.php_root == Path("/etc/php")
        assert cfg.home_root == Path("/home")
        assert cfg.nginx_sites_enabled == Path("/etc/nginx/sites-enabled")
        assert cfg.letsencrypt_live == Path("/etc/letsencrypt/live")

    def test_credentials(self) -> None:
        cfg = CredentialsConfig()
        assert cfg.filename == "site_credentials.txt"
        assert cfg.password_length == 24
        assert cfg.database_host == "127.0.0.1"
        assert cfg.database_port == 3306

    def test_network(self) -> None:
        cfg = NetworkConfig()
        assert cfg.ipv4_url == "https://api.ipify.org"
        assert cfg.ipv6_url == "https://api6.ipify.org"

    def test_defaults_section(self) -> None:
        cfg = DefaultsConfig()
        assert cfg.vhost_template == "WordPress"
        assert cfg.install_ssl is True


class TestValidation:
    def test_short_passwords_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CredentialsConfig(password_length=4)

    def test_sections_frozen(self) -> None:
        cfg = PathsConfig()
        with pytest.raises(ValidationError):
            cfg.home_root = Path("/srv")  # type: ignore[misc]

