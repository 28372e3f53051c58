# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Line scanner shared by the resolv.conf and hosts parsers.

Turns raw input into a lazy sequence of :class:`ScannedLine` values:
comments removed, whitespace trimmed, blank lines dropped and the
remaining text split into whitespace-separated tokens.  Line numbers
always refer to physical lines of the input, so skipped lines still
count.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from unixism.errors import InputReadError, MalformedLineError


#: Anything ``parse()`` accepts: file content, or an iterable of lines
#: such as a binary or text file object.
Source = bytes | str | IO[bytes] | IO[str] | Iterable[bytes] | Iterable[str]

# Group 1 is set for an escaped marker (``\#`` or ``\;``).
_COMMENT_PATTERN = re.compile(r"\\([#;])|[#;]")


@dataclass(frozen=True)
class ScannedLine:
    """A non-blank line, ready for a format-specific interpreter.

    Attributes:
        line_number: 1-based physical line number.
        tokens: Whitespace-separated tokens, never empty.
        raw_text: The physical line without its terminator.
    """

    line_number: int
    tokens: tuple[str, ...]
    raw_text: str


def strip_comment(text: str) -> str:
    """Remove a trailing ``#`` or ``;`` comment from *text*.

    A backslash before a marker escapes it; the marker is kept and the
    backslash dropped.
    """
    parts: list[str] = []
    pos = 0
    for match in _COMMENT_PATTERN.finditer(text):
        parts.append(text[pos : match.start()])
        if match.group(1) is None:
            return "".join(parts)
        parts.append(match.group(1))
        pos = match.end()
    parts.append(text[pos:])
    return "".join(parts)


def _physical_lines(source: Source) -> Iterator[bytes | str]:
    if isinstance(source, bytes):
        return iter(source.split(b"\n"))
    if isinstance(source, str):
        return iter(source.split("\n"))
    return iter(source)


def _decode(raw: bytes | str, line_number: int) -> str:
    if isinstance(raw, str):
        text = raw
    else:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedLineError(
                line_number,
                raw.decode("utf-8", errors="replace").rstrip("\r\n"),
                "not valid UTF-8",
            ) from exc
    return text.rstrip("\n").removesuffix("\r")


def scan_lines(source: Source) -> Iterator[ScannedLine]:
    """Yield the significant lines of *source*.

    Both ``\\n`` and ``\\r\\n`` terminators are accepted.  Bytes are
    decoded as UTF-8.

    Args:
        source: Raw content or an iterable of raw lines.

    Yields:
        One :class:`ScannedLine` per line that still has tokens after
        comment removal.

    Raises:
        InputReadError: If reading from *source* raises ``OSError``.
        MalformedLineError: If a line is not valid UTF-8.  When a text
            stream fails to decode, ``raw_text`` is empty and
            ``line_number`` may be earlier than the offending line, since
            text streams decode ahead in buffered chunks.
    """
    lines = _physical_lines(source)
    line_number = 0
    while True:
        try:
            raw = next(lines)
        except StopIteration:
            return
        except OSError as exc:
            raise InputReadError(f"Could not read input: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise MalformedLineError(
                line_number + 1, "", "not valid UTF-8"
            ) from exc

        line_number += 1
        raw_text = _decode(raw, line_number)
        tokens = strip_comment(raw_text).split()
        if not tokens:
            continue
        yield ScannedLine(line_number, tuple(tokens), raw_text)


@contextmanager
def open_path(path: str | os.PathLike[str]) -> Iterator[IO[bytes]]:
    """Open *path* for binary reading.

    Raises:
        InputReadError: If the file cannot be opened.
    """
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise InputReadError(
            f"Could not read {path}: {exc}", path=Path(path)
        ) from exc
    with f:
        yield f
