# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Field validators shared by the resolv.conf and hosts parsers.

All functions are pure.  They raise a :class:`ValidationError` subclass
describing what is wrong with the token; the line interpreters attach
line context by converting it into a ``MalformedLineError``.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass


IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

#: Largest value accepted by :func:`parse_unsigned` (unsigned 64-bit).
MAX_UNSIGNED = 2**64 - 1

_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")
_LABEL_PATTERN = re.compile(r"[A-Za-z0-9-]+")


class ValidationError(ValueError):
    """Base exception for invalid field values."""


class InvalidAddressError(ValidationError):
    """Raised when a token is not a valid IPv4 or IPv6 address."""


class InvalidDomainError(ValidationError):
    """Raised when a token is not a syntactically valid domain name."""


class InvalidIntegerError(ValidationError):
    """Raised when a token is not a valid non-negative integer."""


@dataclass(frozen=True)
class SortlistEntry:
    """An ``address[/netmask]`` pair from a ``sortlist`` directive."""

    address: IPAddress
    netmask: IPAddress | None = None


def parse_ip_address(text: str) -> IPAddress:
    """Parse an IPv4 or IPv6 address in its standard textual form.

    Dotted-decimal IPv4 with leading zeros or out-of-range octets is
    rejected, as are IPv6 zone identifiers (``fe80::1%eth0``).

    Args:
        text: Address token.

    Returns:
        The parsed address.

    Raises:
        InvalidAddressError: If *text* is not a valid address.
    """
    if "%" in text:
        raise InvalidAddressError(f"zone identifiers are not allowed: {text}")
    try:
        return ipaddress.ip_address(text)
    except ValueError as exc:
        raise InvalidAddressError(f"invalid IP address: {text}") from exc


def validate_domain_name(text: str) -> str:
    """Check that *text* has the shape of a domain name.

    Labels consist of ASCII letters, digits and hyphens and are separated
    by single dots.  No length limits are enforced.

    Args:
        text: Domain name token.

    Returns:
        *text* unchanged.

    Raises:
        InvalidDomainError: If *text* is empty, has empty labels or
            contains characters outside the label alphabet.
    """
    if not text:
        raise InvalidDomainError("empty domain name")
    for label in text.split("."):
        if not label:
            raise InvalidDomainError(f"empty label in domain name: {text}")
        if not _LABEL_PATTERN.fullmatch(label):
            raise InvalidDomainError(f"invalid domain name: {text}")
    return text


def parse_unsigned(text: str) -> int:
    """Parse a base-10 non-negative integer.

    An optional leading ``+`` is accepted; ``-`` is not.

    Args:
        text: Integer token.

    Returns:
        The parsed value.

    Raises:
        InvalidIntegerError: If *text* contains anything but ASCII digits
            (after the optional sign) or exceeds :data:`MAX_UNSIGNED`.
    """
    if not _UNSIGNED_PATTERN.fullmatch(text):
        raise InvalidIntegerError(f"invalid integer: {text!r}")
    value = int(text)
    if value > MAX_UNSIGNED:
        raise InvalidIntegerError(f"integer out of range: {text}")
    return value


def parse_sortlist_entry(text: str) -> SortlistEntry:
    """Parse an ``address[/netmask]`` sortlist token.

    Raises:
        InvalidAddressError: If either half is not a valid address, or
            the token has more than one ``/``.
    """
    address, sep, netmask = text.partition("/")
    if not sep:
        return SortlistEntry(parse_ip_address(address))
    if "/" in netmask:
        raise InvalidAddressError(f"invalid sortlist entry: {text}")
    return SortlistEntry(parse_ip_address(address), parse_ip_address(netmask))
