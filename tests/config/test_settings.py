"""Tests for CpSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from cpdeploy.config.settings import CpSettings


class TestCpSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = CpSettings.from_cli(search_root=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.no_interact is False
        assert settings.control_plane.binary == "clpctl"
        assert settings.paths.php_root == Path("/etc/php")
        assert settings.defaults.install_ssl is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CpSettings.from_cli(search_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "cpdeploy.toml"
        toml.write_text('[control_plane]\nbinary = "/usr/local/bin/clpctl"\n')
        settings = CpSettings.from_cli(search_root=tmp_path)
        assert settings.control_plane.binary == "/usr/local/bin/clpctl"
        assert settings.control_plane.timeout == 300.0  # default preserved
        assert settings.config_path == toml

    def test_sparse_override(self, tmp_path: Path) -> None:
        """Only overridden fields change — rest keeps defaults."""
        (tmp_path / "cpdeploy.toml").write_text("[credentials]\npassword_length = 40\n")
        settings = CpSettings.from_cli(search_root=tmp_path)
        assert settings.credentials.password_length == 40
        assert settings.credentials.filename == "site_credentials.txt"

    def test_walk_up_discovery(self, tmp_path: Path) -> None:
        (tmp_path / "cpdeploy.toml").write_text('[defaults]\nvhost_template = "Generic"\n')
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        settings = CpSettings.from_cli(search_root=deep)
        assert settings.defaults.vhost_template == "Generic"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[paths]\nhome_root = "/srv/home"\n')
        settings = CpSettings.from_cli(config_path=str(custom))
        assert settings.paths.home_root == Path("/srv/home")
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        settings = CpSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None
        assert settings.paths.home_root == Path("/home")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cpdeploy.toml").write_text("[paths\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CpSettings.from_cli(search_root=tmp_path)


class TestEnvVars:
    def test_nested_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CPDEPLOY_NETWORK__TIMEOUT", "9")
        settings = CpSettings.from_cli(search_root=tmp_path)
        assert settings.network.timeout == 9.0

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cpdeploy.toml").write_text("no_interact = false\n")
        monkeypatch.setenv("CPDEPLOY_NO_INTERACT", "true")
        settings = CpSettings.from_cli(search_root=tmp_path)
        assert settings.no_interact is True


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = CpSettings.from_cli(
            search_root=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
            no_interact=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.no_interact is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        """CLI flags take priority over TOML values."""
        (tmp_path / "cpdeploy.toml").write_text("verbose = true\n")
        settings = CpSettings.from_cli(search_root=tmp_path, verbose=False)
        assert settings.verbose is False
