"""Help text for the command line, wrapped to fit the terminal."""

from __future__ import annotations

import os
import subprocess
import sys
from itertools import groupby
from typing import Iterable, TextIO

from remotecache.flags import Flag

DEFAULT_WIDTH = 10000
"""Width used when the terminal width cannot be found."""

MINIMUM_WIDTH = 30
"""Help text is never wrapped more narrowly than this."""

HEADER = "bazel-remote - A remote build cache for Bazel and other REAPI clients"

_HELP_ENTRY = "--help, -h\tshow help"
_OPTION_INDENT = "   "
_WRAP_OFFSET = 6
_CELL_PADDING = 2
_CELL_MIN_WIDTH = 1


def wrap_line(line: str, wrap_at: int, padding: str) -> str:
    """Wrap one line at word boundaries once it reaches ``wrap_at`` columns.

    Wrapped lines start with ``padding``. Whitespace between words is not
    preserved.
    """
    offset = len(padding)
    if wrap_at <= offset:
        return line
    if len(line) <= wrap_at - offset:
        return line

    target_width = wrap_at - offset
    words = line.split()
    if not words:
        return line

    first, *rest = words
    parts = [first]
    space_left = target_width - len(first)
    for word in rest:
        if len(word) + 1 > space_left:
            parts.append("\n" + padding + word)
            space_left = target_width - len(word)
        else:
            parts.append(" " + word)
            space_left -= 1 + len(word)
    return "".join(parts)


def wrap(text: str, offset: int, wrap_at: int) -> str:
    """Wrap possibly multi-line ``text``, indenting continuation lines by ``offset``."""
    prefix = " " * offset
    wrapped = (wrap_line(line, wrap_at, prefix) for line in text.split("\n"))
    return ("\n" + prefix).join(wrapped)


def _parse_width(text: str) -> int | None:
    try:
        width = int(text.strip())
    except ValueError:
        return None
    return max(width, MINIMUM_WIDTH)


def _stdin_for_child():
    try:
        sys.stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return sys.stdin


def console_width() -> int:
    """Return the terminal width, from $COLUMNS or ``tput cols``."""
    columns = os.environ.get("COLUMNS", "")
    if columns:
        width = _parse_width(columns)
        if width is not None:
            return width

    try:
        completed = subprocess.run(
            ["tput", "cols"],
            stdin=_stdin_for_child(),
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, ValueError, subprocess.SubprocessError):
        return DEFAULT_WIDTH

    width = _parse_width(completed.stdout)
    return DEFAULT_WIDTH if width is None else width


def _align_cells(rows: list[list[str]], column: int = 0) -> None:
    """Pad tab-terminated cells so that each block of lines lines up."""
    for has_cell, group in groupby(rows, key=lambda row: len(row) - 1 > column):
        if not has_cell:
            continue
        block = list(group)
        width = max(_CELL_MIN_WIDTH, max(len(row[column]) for row in block) + _CELL_PADDING)
        for row in block:
            row[column] = row[column].ljust(width)
        _align_cells(block, column + 1)


def _tabulate(text: str) -> str:
    rows = [line.split("\t") for line in text.split("\n")]
    _align_cells(rows)
    return "\n".join("".join(row) for row in rows)


def format_help(name: str, flags: Iterable[Flag]) -> str:
    """Return the help text for program ``name`` with the given flags."""
    max_line_length = console_width()
    entries = [flag.help_entry() for flag in flags]
    entries.append(_HELP_ENTRY)
    options = ("\n" + _OPTION_INDENT).join(
        wrap(entry, _WRAP_OFFSET, max_line_length) + "\n" for entry in entries
    )
    text = (
        f"{HEADER}\n"
        "\n"
        "USAGE:\n"
        f"{_OPTION_INDENT}{name} [options]\n"
        "\n"
        "OPTIONS:\n"
        f"{_OPTION_INDENT}{options}"
    )
    return _tabulate(text)


def print_help(name: str, flags: Iterable[Flag], out: TextIO) -> None:
    """Write the help text for program ``name`` to ``out``."""
    out.write(format_help(name, flags))