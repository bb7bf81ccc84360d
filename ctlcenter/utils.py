"""Small helpers: fatal errors, running commands, reading sysfs integers."""

from __future__ import annotations

import re
import subprocess
import sys
from collections.abc import Callable, Sequence
from os import PathLike
from typing import NoReturn, Optional, Union

from ctlcenter.config import Widget

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def die(message: str) -> NoReturn:
    """Print ``message`` to stderr and exit with status 1.

    A message ending in ``:`` is followed by the exception being handled, if any.
    """
    text = message
    if message.endswith(":"):
        current = sys.exc_info()[1]
        text += " " + (str(current) if current is not None else "Success")
    print(text, file=sys.stderr)
    raise SystemExit(1)


def execute_command_args(argv: Sequence[str]) -> int:
    """Run a command with its output discarded, wait for it and return its status."""
    try:
        completed = subprocess.run(
            list(argv),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return 1
    return completed.returncode


def read_int_from_file(path: Union[str, PathLike]) -> int:
    """Read the leading decimal integer of a file.

    Raises OSError if the file cannot be opened and ValueError if it does
    not start with an integer.
    """
    with open(path, encoding="ascii", errors="replace") as handle:
        content = handle.read()
    match = _LEADING_INT.match(content)
    if match is None:
        raise ValueError(f"Failed to read integer from {path}")
    return int(match.group(1))


def set_value(widget: Widget, state: Optional[Callable[[], object]]) -> None:
    """Show the widget's valid or invalid label according to ``state``."""
    ok = state() if state is not None else True
    widget.text = widget.valid_label if ok else widget.invalid_label