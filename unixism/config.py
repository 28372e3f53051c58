# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Locations of the system files read by ``parse_default()``.

Built-in defaults are ``/etc/resolv.conf`` and the platform hosts file.
They can be overridden per user in a YAML file following the XDG Base
Directory Specification:

    ``$XDG_CONFIG_HOME/unixism/unixism.yaml``
    (typically ``~/.config/unixism/unixism.yaml``)

Example::

    paths:
      resolv_conf: /run/systemd/resolve/resolv.conf
      hosts: !env HOSTS_FILE

``!env`` tags resolve values from environment variables at load time.
An unset variable leaves the built-in default in place.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml
from platformdirs import user_config_path


logger = logging.getLogger(__name__)

#: Application name for XDG path resolution.
_APP_NAME = "unixism"

_RESOLV_CONF = Path("/etc/resolv.conf")
_POSIX_HOSTS = Path("/etc/hosts")

_PATH_KEYS = frozenset({"resolv_conf", "hosts"})


class ConfigError(Exception):
    """Raised when the path configuration file is invalid."""


def get_config_path() -> Path:
    """Return the default config file path.

    Uses XDG: ``$XDG_CONFIG_HOME/unixism/unixism.yaml`` (typically
    ``~/.config/unixism/unixism.yaml``).
    """
    return user_config_path(_APP_NAME) / "unixism.yaml"


def default_hosts_path() -> Path:
    """Return the platform's hosts file location."""
    if sys.platform == "win32":
        system_root = os.environ.get("SystemRoot", r"C:\Windows")
        return Path(system_root) / "System32" / "drivers" / "etc" / "hosts"
    return _POSIX_HOSTS


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


def _resolve_path(key: str, value: object, default: Path) -> Path:
    """Resolve a configured path, falling back to *default*."""
    if isinstance(value, _EnvVar):
        env_value = os.environ.get(value.var_name)
        if not env_value:
            logger.debug(
                "Environment variable %s not set; using %s for %s",
                value.var_name,
                default,
                key,
            )
            return default
        value = env_value
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ConfigError(f"paths.{key} must be a non-empty string")
    return Path(value).expanduser()


@dataclass(frozen=True)
class SystemPaths:
    """Files opened by the ``parse_default()`` functions."""

    resolv_conf: Path
    hosts: Path

    @classmethod
    def default(cls) -> SystemPaths:
        return cls(resolv_conf=_RESOLV_CONF, hosts=default_hosts_path())

    @classmethod
    def from_yaml(cls, config_path: Path | None = None) -> SystemPaths:
        """Load path overrides from a YAML file.

        Args:
            config_path: Path to the YAML config file.  Defaults to
                ``~/.config/unixism/unixism.yaml`` (XDG).

        Returns:
            Configured paths; built-in defaults when the file is absent.

        Raises:
            ConfigError: If the file cannot be read or has the wrong shape.
        """
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            return cls.default()

        try:
            with open(config_path) as f:
                raw = yaml.load(f, Loader=_make_loader())
        except OSError as exc:
            raise ConfigError(f"Could not read {config_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if raw is None:
            return cls.default()
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Config file must be a YAML mapping: {config_path}"
            )

        logger.debug("Loaded path configuration from %s", config_path)
        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict) -> SystemPaths:
        """Build paths from a parsed (but unresolved) YAML dict."""
        paths = raw.get("paths")
        if paths is None:
            paths = {}
        if not isinstance(paths, dict):
            raise ConfigError("'paths' must be a mapping")

        unknown = set(paths) - _PATH_KEYS
        if unknown:
            raise ConfigError(
                f"Unknown keys under 'paths': {', '.join(sorted(unknown))}"
            )

        defaults = cls.default()
        return cls(
            resolv_conf=_resolve_path(
                "resolv_conf", paths.get("resolv_conf"), defaults.resolv_conf
            ),
            hosts=_resolve_path("hosts", paths.get("hosts"), defaults.hosts),
        )
