# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for unixism/config.py -- default system path configuration."""

from pathlib import Path

import pytest

from unixism.config import (
    ConfigError,
    SystemPaths,
    default_hosts_path,
    get_config_path,
)


class TestDefaults:
    """Tests for built-in default paths."""

    def test_default_resolv_conf(self) -> None:
        """The resolver config defaults to /etc/resolv.conf."""
        assert SystemPaths.default().resolv_conf == Path("/etc/resolv.conf")

    def test_posix_hosts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """POSIX platforms use /etc/hosts."""
        monkeypatch.setattr("unixism.config.sys.platform", "linux")
        assert default_hosts_path() == Path("/etc/hosts")

    def test_windows_hosts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Windows uses the hosts file under SystemRoot."""
        monkeypatch.setattr("unixism.config.sys.platform", "win32")
        monkeypatch.setenv("SystemRoot", "D:/Win")
        assert default_hosts_path() == Path(
            "D:/Win/System32/drivers/etc/hosts"
        )

    def test_config_path_name(self) -> None:
        """The config file lives at unixism/unixism.yaml."""
        path = get_config_path()
        assert path.name == "unixism.yaml"
        assert path.parent.name == "unixism"


class TestFromYaml:
    """Tests for SystemPaths.from_yaml()."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """An absent config file yields the built-in defaults."""
        paths = SystemPaths.from_yaml(tmp_path / "absent.yaml")
        assert paths == SystemPaths.default()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """An empty config file yields the built-in defaults."""
        config = tmp_path / "unixism.yaml"
        config.write_text("")
        assert SystemPaths.from_yaml(config) == SystemPaths.default()

    def test_empty_paths_gives_defaults(self, tmp_path: Path) -> None:
        """A ``paths`` key with no value yields the defaults."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n")
        assert SystemPaths.from_yaml(config) == SystemPaths.default()

    def test_overrides(self, tmp_path: Path) -> None:
        """Both paths can be overridden."""
        config = tmp_path / "unixism.yaml"
        config.write_text(
            "paths:\n"
            "  resolv_conf: /run/systemd/resolve/resolv.conf\n"
            "  hosts: /srv/hosts\n"
        )
        paths = SystemPaths.from_yaml(config)
        assert paths.resolv_conf == Path("/run/systemd/resolve/resolv.conf")
        assert paths.hosts == Path("/srv/hosts")

    def test_partial_override(self, tmp_path: Path) -> None:
        """Unset keys keep their defaults."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  hosts: /srv/hosts\n")
        paths = SystemPaths.from_yaml(config)
        assert paths.resolv_conf == SystemPaths.default().resolv_conf
        assert paths.hosts == Path("/srv/hosts")

    def test_env_tag(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """``!env`` values resolve from the environment."""
        monkeypatch.setenv("TEST_HOSTS_FILE", "/opt/hosts")
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  hosts: !env TEST_HOSTS_FILE\n")
        assert SystemPaths.from_yaml(config).hosts == Path("/opt/hosts")

    def test_env_tag_unset_falls_back(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unset ``!env`` variable leaves the default in place."""
        monkeypatch.delenv("TEST_RESOLV_FILE", raising=False)
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  resolv_conf: !env TEST_RESOLV_FILE\n")
        paths = SystemPaths.from_yaml(config)
        assert paths.resolv_conf == SystemPaths.default().resolv_conf

    def test_user_expansion(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """``~`` expands to the user's home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  hosts: ~/hosts\n")
        assert SystemPaths.from_yaml(config).hosts == tmp_path / "hosts"

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        config = tmp_path / "unixism.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="YAML mapping"):
            SystemPaths.from_yaml(config)

    def test_paths_not_a_mapping(self, tmp_path: Path) -> None:
        """A scalar ``paths`` value is rejected."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths: /etc/hosts\n")
        with pytest.raises(ConfigError, match="'paths' must be a mapping"):
            SystemPaths.from_yaml(config)

    def test_paths_empty_list(self, tmp_path: Path) -> None:
        """An empty list for ``paths`` is rejected, not treated as unset."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths: []\n")
        with pytest.raises(ConfigError, match="'paths' must be a mapping"):
            SystemPaths.from_yaml(config)

    def test_paths_empty_string(self, tmp_path: Path) -> None:
        """An empty string for ``paths`` is rejected."""
        config = tmp_path / "unixism.yaml"
        config.write_text('paths: ""\n')
        with pytest.raises(ConfigError, match="'paths' must be a mapping"):
            SystemPaths.from_yaml(config)

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys under ``paths`` are rejected by name."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  nsswitch: /etc/nsswitch.conf\n")
        with pytest.raises(ConfigError, match="nsswitch"):
            SystemPaths.from_yaml(config)

    def test_non_string_value(self, tmp_path: Path) -> None:
        """A non-string path value is rejected."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  hosts: 42\n")
        with pytest.raises(ConfigError, match="paths.hosts"):
            SystemPaths.from_yaml(config)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML raises ConfigError."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            SystemPaths.from_yaml(config)

    def test_default_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without an argument, the XDG config path is read."""
        config = tmp_path / "unixism.yaml"
        config.write_text("paths:\n  hosts: /srv/hosts\n")
        monkeypatch.setattr("unixism.config.get_config_path", lambda: config)
        assert SystemPaths.from_yaml().hosts == Path("/srv/hosts")
