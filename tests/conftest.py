"""Shared pytest fixtures and test helpers for cpdeploy tests."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from cpdeploy.config.settings import CpSettings
from cpdeploy.infrastructure.server import Server
from cpdeploy.services.telemetry import disable_telemetry

SERVER_IPV4 = "203.0.113.10"
SERVER_IPV6 = "2001:db8::10"

# Stand-in for CloudPanel's clpctl.  Every invocation is appended to
# clpctl.log next to the script.  Behaviour is steered by env vars:
#   FAKE_CLPCTL_FAIL         subcommand that exits 1 (e.g. "db:add")
#   FAKE_CLPCTL_SITES        text printed by site:list
#   FAKE_CLPCTL_CERT_OUTPUT  text printed by lets-encrypt:install:certificate
#   FAKE_CLPCTL_CERT_STATUS  exit status of lets-encrypt:install:certificate
_FAKE_CLPCTL = """\
#!/usr/bin/env bash
here="$(cd "$(dirname "$0")" && pwd)"
echo "$*" >> "$here/clpctl.log"

cmd="$1"
shift
domain=""
user=""
for arg in "$@"; do
  case "$arg" in
    --domainName=*) domain="${arg#--domainName=}" ;;
    --siteUser=*) user="${arg#--siteUser=}" ;;
  esac
done

if [ "$cmd" = "${FAKE_CLPCTL_FAIL:-}" ]; then
  echo "Error: $cmd failed for ${domain}"
  exit 1
fi

case "$cmd" in
  site:list)
    printf '%s\\n' "${FAKE_CLPCTL_SITES:-}"
    ;;
  vhost-templates:list)
    echo "+-------------+-------------+"
    echo "| Name        | Type        |"
    echo "+-------------+-------------+"
    echo "| Generic     | Public      |"
    echo "| Laravel 11  | Public      |"
    echo "| WooCommerce | Public      |"
    echo "| WordPress   | Public      |"
    echo "+-------------+-------------+"
    ;;
  site:add:php)
    mkdir -p "@HOME_ROOT@/$user/htdocs/$domain"
    echo "Site has been created."
    ;;
  db:add)
    echo "Database has been created."
    ;;
  lets-encrypt:install:certificate)
    printf '%s\\n' "${FAKE_CLPCTL_CERT_OUTPUT:-Certificate has been installed.}"
    exit "${FAKE_CLPCTL_CERT_STATUS:-0}"
    ;;
  site:delete)
    rm -f "@NGINX_SITES@/$domain.conf"
    echo "Site has been deleted."
    ;;
  *)
    echo "Command \\"$cmd\\" is not defined."
    exit 1
    ;;
esac
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment and config out of every test."""
    for name in list(os.environ):
        if name.startswith(("CPDEPLOY_", "FAKE_CLPCTL_")):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """``-v`` enables telemetry process-wide; switch it off between tests."""
    disable_telemetry()
    yield
    disable_telemetry()


@pytest.fixture
def host_root(tmp_path: Path) -> Path:
    """Temporary CloudPanel host layout.

    PHP 8.1, 8.3, and 8.10 are installed; ``php/common`` is not a runtime.
    """
    root = tmp_path / "host"
    for version in ("8.1", "8.3", "8.10", "common"):
        (root / "php" / version).mkdir(parents=True)
    (root / "home").mkdir()
    (root / "nginx" / "sites-enabled").mkdir(parents=True)
    (root / "letsencrypt" / "live").mkdir(parents=True)
    return root


@pytest.fixture
def fake_clpctl(host_root: Path) -> Path:
    """Executable fake ``clpctl`` that records its arguments."""
    script = host_root / "bin" / "clpctl"
    script.parent.mkdir()
    body = _FAKE_CLPCTL.replace("@HOME_ROOT@", str(host_root / "home")).replace(
        "@NGINX_SITES@", str(host_root / "nginx" / "sites-enabled")
    )
    script.write_text(body)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def config_file(tmp_path: Path, host_root: Path, fake_clpctl: Path) -> Path:
    """``cpdeploy.toml`` pointing every host path into *host_root*."""
    path = tmp_path / "cpdeploy.toml"
    path.write_text(
        f"""\
[control_plane]
binary = "{fake_clpctl}"
timeout = 30

[paths]
php_root = "{host_root / "php"}"
home_root = "{host_root / "home"}"
nginx_sites_enabled = "{host_root / "nginx" / "sites-enabled"}"
letsencrypt_live = "{host_root / "letsencrypt" / "live"}"

[network]
timeout = 1
"""
    )
    return path


@pytest.fixture
def dns_records() -> dict[str, str]:
    """Domain -> address answers served by the stubbed resolver."""
    return {}


@pytest.fixture(autouse=True)
def _offline_network(monkeypatch: pytest.MonkeyPatch, dns_records: dict[str, str]) -> None:
    """Replace public IP discovery and DNS lookups with local stubs."""

    def fake_fetch(url: str, *, timeout: float = 5.0) -> str | None:
        return SERVER_IPV6 if "api6" in url else SERVER_IPV4

    def fake_resolve(domain: str, *, lifetime: float = 5.0) -> str | None:
        return dns_records.get(domain)

    monkeypatch.setattr("cpdeploy.infrastructure.server.fetch_public_ip", fake_fetch)
    monkeypatch.setattr("cpdeploy.infrastructure.server.resolve_address", fake_resolve)


@pytest.fixture(autouse=True)
def _not_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never run as root; skip chown on the credentials file."""
    monkeypatch.setattr(Server, "is_root", lambda self: False)


@pytest.fixture
def settings(config_file: Path) -> CpSettings:
    return CpSettings.from_cli(config_path=str(config_file))


@pytest.fixture
def server(settings: CpSettings) -> Server:
    """Server bound to the temporary host layout and fake clpctl."""
    return Server(settings)


@pytest.fixture
def clpctl_calls(fake_clpctl: Path) -> Callable[[], list[str]]:
    """Return a reader for the argument lines the fake clpctl recorded."""
    log = fake_clpctl.parent / "clpctl.log"

    def read() -> list[str]:
        if not log.exists():
            return []
        return log.read_text().splitlines()

    return read


@pytest.fixture
def clpctl_subcommands(clpctl_calls: Callable[[], list[str]]) -> Callable[[], list[str]]:
    """Return a reader for just the subcommand of each recorded call."""
    return lambda: [line.split()[0] for line in clpctl_calls()]
