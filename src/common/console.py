"""Console output helpers for user-facing messages."""

from __future__ import annotations

import sys
from typing import Iterable, NoReturn, Optional, TextIO, Union

from constants import ExitCodes

Lines = Union[str, Iterable[Optional[str]], None]


def print_lines(text: Lines = None, stream: Optional[TextIO] = None) -> None:
    """Print a string or a sequence of lines, each indented by two spaces.

    ``None`` (or an empty sequence entry) prints a blank line.
    """
    out = stream if stream is not None else sys.stdout
    if text is None:
        out.write("\n")
        return
    if isinstance(text, str):
        lines = [text]
    else:
        lines = list(text)
    for line in lines:
        out.write(f"  {line}\n" if line else "\n")


def die(text: Lines, exit_code: int = ExitCodes.FATAL.value) -> NoReturn:
    """Print a fatal message surrounded by blank lines and exit."""
    print_lines(stream=sys.stderr)
    print_lines(text, stream=sys.stderr)
    print_lines(stream=sys.stderr)
    sys.exit(exit_code)
