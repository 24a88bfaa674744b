"""Error reporting in the ``pipex: ...`` style used by the pipeline and its command."""

from __future__ import annotations

import sys
from typing import TextIO

PROGRAM_NAME = "pipex"


class PipexError(Exception):
    """A failure that ends the pipeline with an exit status."""

    def __init__(self, message: str = "", status: int = 1) -> None:
        super().__init__(message)
        self.status = status


def format_error(e1: str, e2: str = "", e3: str = "") -> str:
    """Return the diagnostic line ``pipex: <e1><e2><e3>`` ending with a newline."""
    return f"{PROGRAM_NAME}: {e1}{e2}{e3}\n"


def display_error(
    e1: str,
    e2: str = "",
    e3: str = "",
    status: int = 1,
    stream: TextIO | None = None,
) -> int:
    """Write the diagnostic line to ``stream`` (stderr by default) and return ``status``."""
    target = sys.stderr if stream is None else stream
    target.write(format_error(e1, e2, e3))
    target.flush()
    return status