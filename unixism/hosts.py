# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Parser for the static host name mapping file (``/etc/hosts``).

Each significant line is an IP address followed by one or more host
names; the first name is conventionally the canonical one.  Lines are
returned in file order and never merged, so an address listed on two
lines produces two entries.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from unixism.config import SystemPaths
from unixism.errors import MalformedLineError
from unixism.scanner import ScannedLine, Source, open_path, scan_lines
from unixism.validators import IPAddress, ValidationError, parse_ip_address


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostEntry:
    """One line of a hosts file.

    Attributes:
        ip: The mapped address.
        names: Host names in line order, never empty.
    """

    ip: IPAddress
    names: tuple[str, ...]

    def __post_init__(self) -> None:
        """Reject entries without names.

        Raises:
            ValueError: If ``names`` is empty or contains an empty name.
        """
        if not self.names:
            raise ValueError("a host entry needs at least one name")
        if not all(self.names):
            raise ValueError("host names must be non-empty")

    @property
    def canonical_name(self) -> str:
        return self.names[0]

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.names[1:]


def _entry_from_line(line: ScannedLine) -> HostEntry:
    address, *names = line.tokens
    try:
        ip = parse_ip_address(address)
    except ValidationError as exc:
        raise MalformedLineError(
            line.line_number, line.raw_text, str(exc)
        ) from exc
    if not names:
        raise MalformedLineError(
            line.line_number, line.raw_text, f"no host names after {address}"
        )
    return HostEntry(ip, tuple(names))


def parse_lines(lines: Iterable[ScannedLine]) -> list[HostEntry]:
    """Build host entries from already-scanned lines.

    Raises:
        MalformedLineError: On the first invalid line.
    """
    return [_entry_from_line(line) for line in lines]


def parse(source: Source) -> list[HostEntry]:
    """Parse a hosts file from *source*.

    Args:
        source: File content (``bytes`` or ``str``) or a file object,
            typically opened in binary mode.  A ``str`` is the content
            itself, not a filename; use :func:`parse_path` to read a file.

    Returns:
        One entry per significant line, in file order.

    Raises:
        InputReadError: If *source* cannot be read.
        MalformedLineError: On the first line whose address is invalid or
            which has no host names.  No partial result is returned.
    """
    entries = parse_lines(scan_lines(source))
    logger.debug("Parsed %d host entries", len(entries))
    return entries


def parse_path(path: str | os.PathLike[str]) -> list[HostEntry]:
    """Open *path* and parse it as a hosts file.

    Raises:
        InputReadError: If the file cannot be opened or read.
        MalformedLineError: On the first malformed line.
    """
    with open_path(path) as f:
        return parse(f)


def parse_default(paths: SystemPaths | None = None) -> list[HostEntry]:
    """Parse the system hosts file.

    Args:
        paths: Path configuration.  Defaults to
            :meth:`SystemPaths.from_yaml`, i.e. the platform hosts file
            unless overridden in the user config file.

    Raises:
        ConfigError: If the user config file is invalid.
        InputReadError: If the file cannot be opened or read.
        MalformedLineError: On the first malformed line.
    """
    if paths is None:
        paths = SystemPaths.from_yaml()
    logger.info("Reading hosts file from %s", paths.hosts)
    return parse_path(paths.hosts)


def lookup_names(
    entries: Sequence[HostEntry], ip: IPAddress | str
) -> list[str]:
    """Return every name mapped to *ip*, in file order.

    Raises:
        InvalidAddressError: If *ip* is a string that is not an address.
    """
    if isinstance(ip, str):
        ip = parse_ip_address(ip)
    return [name for entry in entries if entry.ip == ip for name in entry.names]


def lookup_addresses(
    entries: Sequence[HostEntry], name: str
) -> list[IPAddress]:
    """Return every address *name* maps to, in file order.

    Host names compare case-insensitively.
    """
    wanted = name.casefold()
    return [
        entry.ip
        for entry in entries
        if any(n.casefold() == wanted for n in entry.names)
    ]
