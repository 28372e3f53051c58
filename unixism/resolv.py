# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Parser for the DNS resolver configuration file (``resolv.conf``).

Recognized directives:

- ``nameserver <address>``: appended to :attr:`ResolvConfig.nameservers`.
- ``domain <name>``: resets the search list to ``[name]``.
- ``search <name>...``: replaces the search list.  The last ``search``
  or ``domain`` line in the file wins; lists are never concatenated.
- ``sortlist <address[/netmask]>...``: appended to
  :attr:`ResolvConfig.sortlist`.
- ``options <option>...``: each token becomes a :class:`ConfigOption`.

Directive keywords are case-sensitive.  Lines starting with any other
keyword are skipped so newer resolver directives do not break parsing.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from unixism.config import SystemPaths
from unixism.errors import MalformedLineError
from unixism.scanner import ScannedLine, Source, open_path, scan_lines
from unixism.validators import (
    IPAddress,
    SortlistEntry,
    ValidationError,
    parse_ip_address,
    parse_sortlist_entry,
    parse_unsigned,
    validate_domain_name,
)


logger = logging.getLogger(__name__)


class OptionKind(Enum):
    """Discriminant of a :class:`ConfigOption`.

    Values are the option names as written in ``resolv.conf``.  The
    ``UNKNOWN`` member carries options this module does not recognize;
    they are preserved rather than rejected.
    """

    DEBUG = "debug"
    NDOTS = "ndots"
    TIMEOUT = "timeout"
    ATTEMPTS = "attempts"
    ROTATE = "rotate"
    NO_AAAA = "no-aaaa"
    NO_CHECK_NAMES = "no-check-names"
    INET6 = "inet6"
    IP6_BYTESTRING = "ip6-bytestring"
    IP6_DOTINT = "ip6-dotint"
    NO_IP6_DOTINT = "no-ip6-dotint"
    EDNS0 = "edns0"
    SINGLE_REQUEST = "single-request"
    SINGLE_REQUEST_REOPEN = "single-request-reopen"
    NO_TLD_QUERY = "no-tld-query"
    USE_VC = "use-vc"
    NO_RELOAD = "no-reload"
    TRUST_AD = "trust-ad"
    UNKNOWN = "_unknown"


#: Options written as ``name:value`` with a non-negative integer value.
NUMERIC_OPTIONS = frozenset(
    {OptionKind.NDOTS, OptionKind.TIMEOUT, OptionKind.ATTEMPTS}
)

#: Options written as a bare keyword.
FLAG_OPTIONS = frozenset(OptionKind) - NUMERIC_OPTIONS - {OptionKind.UNKNOWN}

_KINDS_BY_NAME = {
    kind.value: kind for kind in OptionKind if kind is not OptionKind.UNKNOWN
}


@dataclass(frozen=True)
class ConfigOption:
    """A single resolver option.

    Which payload slot is used depends on ``kind``: numeric options carry
    ``value``, ``UNKNOWN`` carries the verbatim token in ``raw`` and flag
    options carry neither.
    """

    kind: OptionKind
    value: int | None = None
    raw: str | None = None

    def __post_init__(self) -> None:
        """Check that the payload matches the kind.

        Raises:
            ValueError: If a payload slot is missing or unexpected.
        """
        if self.kind in NUMERIC_OPTIONS:
            if self.value is None or self.value < 0 or self.raw is not None:
                raise ValueError(
                    f"{self.kind.value} requires a non-negative value"
                )
        elif self.kind is OptionKind.UNKNOWN:
            if self.raw is None or self.value is not None:
                raise ValueError("unknown options require the raw token")
        elif self.value is not None or self.raw is not None:
            raise ValueError(f"{self.kind.value} takes no payload")

    @classmethod
    def flag(cls, kind: OptionKind) -> ConfigOption:
        return cls(kind)

    @classmethod
    def numeric(cls, kind: OptionKind, value: int) -> ConfigOption:
        return cls(kind, value=value)

    @classmethod
    def unknown(cls, raw: str) -> ConfigOption:
        return cls(OptionKind.UNKNOWN, raw=raw)


def parse_option(token: str) -> ConfigOption:
    """Parse one token of an ``options`` directive.

    Names are matched case-insensitively.  A numeric option name followed
    by ``:value`` yields a numeric option; a bare flag name yields a flag.
    Everything else, including ``timeout`` without a value or ``rotate:1``,
    is kept verbatim as an ``UNKNOWN`` option.

    Raises:
        InvalidIntegerError: If a numeric option's value is not a valid
            non-negative integer.
    """
    name, sep, value = token.partition(":")
    kind = _KINDS_BY_NAME.get(name.lower())
    if sep and kind in NUMERIC_OPTIONS:
        return ConfigOption.numeric(kind, parse_unsigned(value))
    if not sep and kind in FLAG_OPTIONS:
        return ConfigOption.flag(kind)
    logger.warning("Preserving unrecognized resolver option %r", token)
    return ConfigOption.unknown(token)


@dataclass(frozen=True)
class ResolvConfig:
    """Parsed contents of a resolver configuration file.

    No defaults are filled in: a file without ``nameserver`` lines yields
    an empty ``nameservers`` tuple.
    """

    nameservers: tuple[IPAddress, ...] = ()
    search_domains: tuple[str, ...] = ()
    sortlist: tuple[SortlistEntry, ...] = ()
    options: tuple[ConfigOption, ...] = ()

    def option(self, kind: OptionKind) -> ConfigOption | None:
        """Return the last option of *kind*, or ``None`` if absent.

        The resolver applies options in order, so a later
        ``timeout:n`` overrides an earlier one.
        """
        for opt in reversed(self.options):
            if opt.kind is kind:
                return opt
        return None

    def has_option(self, kind: OptionKind) -> bool:
        return self.option(kind) is not None


@dataclass
class _Builder:
    """Mutable accumulator used while a single parse is running."""

    nameservers: list[IPAddress] = field(default_factory=list)
    search_domains: list[str] = field(default_factory=list)
    sortlist: list[SortlistEntry] = field(default_factory=list)
    options: list[ConfigOption] = field(default_factory=list)

    def nameserver(self, args: tuple[str, ...]) -> None:
        self.nameservers.append(parse_ip_address(args[0]))

    def domain(self, args: tuple[str, ...]) -> None:
        self.search_domains = [validate_domain_name(args[0])]

    def search(self, args: tuple[str, ...]) -> None:
        self.search_domains = [validate_domain_name(arg) for arg in args]

    def sortlist_entries(self, args: tuple[str, ...]) -> None:
        self.sortlist.extend(parse_sortlist_entry(arg) for arg in args)

    def option_tokens(self, args: tuple[str, ...]) -> None:
        self.options.extend(parse_option(arg) for arg in args)

    def build(self) -> ResolvConfig:
        return ResolvConfig(
            nameservers=tuple(self.nameservers),
            search_domains=tuple(self.search_domains),
            sortlist=tuple(self.sortlist),
            options=tuple(self.options),
        )


_Handler = Callable[[_Builder, tuple[str, ...]], None]

# keyword -> (min args, max args or None for unbounded, handler)
_DIRECTIVES: dict[str, tuple[int, int | None, _Handler]] = {
    "nameserver": (1, 1, _Builder.nameserver),
    "domain": (1, 1, _Builder.domain),
    "search": (1, None, _Builder.search),
    "sortlist": (1, None, _Builder.sortlist_entries),
    "options": (1, None, _Builder.option_tokens),
}


def _apply_line(builder: _Builder, line: ScannedLine) -> None:
    keyword, *rest = line.tokens
    args = tuple(rest)
    directive = _DIRECTIVES.get(keyword)
    if directive is None:
        logger.debug(
            "Skipping unknown directive %r on line %d",
            keyword,
            line.line_number,
        )
        return

    min_args, max_args, handler = directive
    if len(args) < min_args:
        raise MalformedLineError(
            line.line_number, line.raw_text, f"{keyword} requires a value"
        )
    if max_args is not None and len(args) > max_args:
        raise MalformedLineError(
            line.line_number,
            line.raw_text,
            f"{keyword} takes exactly {max_args} value, got {len(args)}",
        )

    try:
        handler(builder, args)
    except ValidationError as exc:
        raise MalformedLineError(
            line.line_number, line.raw_text, str(exc)
        ) from exc


def parse_lines(lines: Iterable[ScannedLine]) -> ResolvConfig:
    """Build a :class:`ResolvConfig` from already-scanned lines.

    Raises:
        MalformedLineError: On the first invalid directive.
    """
    builder = _Builder()
    for line in lines:
        _apply_line(builder, line)
    return builder.build()


def parse(source: Source) -> ResolvConfig:
    """Parse resolver configuration from *source*.

    Args:
        source: File content (``bytes`` or ``str``) or a file object,
            typically opened in binary mode.  A ``str`` is the content
            itself, not a filename; use :func:`parse_path` to read a file.

    Returns:
        The parsed configuration.

    Raises:
        InputReadError: If *source* cannot be read.
        MalformedLineError: On the first malformed line.  No partial
            result is returned.
    """
    config = parse_lines(scan_lines(source))
    logger.debug(
        "Parsed resolver config: %d nameserver(s), %d search domain(s), "
        "%d option(s)",
        len(config.nameservers),
        len(config.search_domains),
        len(config.options),
    )
    return config


def parse_path(path: str | os.PathLike[str]) -> ResolvConfig:
    """Open *path* and parse it as a resolver configuration file.

    Raises:
        InputReadError: If the file cannot be opened or read.
        MalformedLineError: On the first malformed line.
    """
    with open_path(path) as f:
        return parse(f)


def parse_default(paths: SystemPaths | None = None) -> ResolvConfig:
    """Parse the system resolver configuration file.

    Args:
        paths: Path configuration.  Defaults to
            :meth:`SystemPaths.from_yaml`, i.e. ``/etc/resolv.conf``
            unless overridden in the user config file.

    Raises:
        ConfigError: If the user config file is invalid.
        InputReadError: If the file cannot be opened or read.
        MalformedLineError: On the first malformed line.
    """
    if paths is None:
        paths = SystemPaths.from_yaml()
    logger.info("Reading resolver configuration from %s", paths.resolv_conf)
    return parse_path(paths.resolv_conf)
