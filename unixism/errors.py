# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Exceptions raised while parsing system configuration files.

Every failure surfaced by :mod:`unixism.resolv` and :mod:`unixism.hosts`
derives from :class:`ParseError`, so callers that only need to know
whether a file could be parsed can catch that single type.
"""

from __future__ import annotations

from pathlib import Path


class ParseError(Exception):
    """Base exception for parse failures."""


class InputReadError(ParseError):
    """Raised when the underlying input cannot be read.

    The originating ``OSError`` is available as ``__cause__``.

    Attributes:
        path: Filesystem path being read, if the input came from a path.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class MalformedLineError(ParseError):
    """Raised when a line violates the grammar of its file format.

    Attributes:
        line_number: 1-based physical line number in the input.
        raw_text: The physical line as read, without its line terminator.
        reason: Short human-readable description of the violation.
    """

    def __init__(self, line_number: int, raw_text: str, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}: {raw_text!r}")
        self.line_number = line_number
        self.raw_text = raw_text
        self.reason = reason
