# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Parsers for Unix resolver and hosts configuration files.

Each format lives in its own module with the same entry points::

    from unixism import hosts, resolv

    config = resolv.parse_default()          # /etc/resolv.conf
    entries = hosts.parse(open("hosts", "rb"))

Both raise :class:`ParseError` subclasses on failure.
"""

from unixism import hosts, resolv
from unixism.config import ConfigError, SystemPaths
from unixism.errors import InputReadError, MalformedLineError, ParseError
from unixism.hosts import HostEntry
from unixism.resolv import ConfigOption, OptionKind, ResolvConfig
from unixism.validators import IPAddress, SortlistEntry


__all__ = [
    # Modules
    "hosts",
    "resolv",
    # Types
    "ConfigOption",
    "HostEntry",
    "IPAddress",
    "OptionKind",
    "ResolvConfig",
    "SortlistEntry",
    "SystemPaths",
    # Errors
    "ConfigError",
    "InputReadError",
    "MalformedLineError",
    "ParseError",
]
