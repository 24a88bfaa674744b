"""Command-line entry points: the two-command pipeline and the multi-command variant."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from pipekit.errors import PROGRAM_NAME, PipexError, display_error
from pipekit.pipeline import HEREDOC_KEYWORD, Pipeline

USAGE = "./nameprogram file1 cmd1 cmd2 file2."
BONUS_USAGE = "./pipex file1 cmd1 cmd2 ... cmdn file2."
HEREDOC_USAGE = "./pipex here_doc LIMITER cmd1 cmd2 ... cmdn file2."


def _full_argv(argv: Sequence[str] | None) -> list[str]:
    args = sys.argv[1:] if argv is None else list(argv)
    return [PROGRAM_NAME, *args]


def _run(full_argv: list[str]) -> int:
    try:
        with Pipeline(full_argv, os.environ) as pipeline:
            return pipeline.run()
    except PipexError as exc:
        return exc.status


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``infile cmd1 cmd2 outfile`` and return the last command's status."""
    full = _full_argv(argv)
    if len(full) != 5:
        return display_error("Usage: ", USAGE, "", 1)
    return _run(full)


def bonus_main(argv: Sequence[str] | None = None) -> int:
    """Run any number of commands, or a here-document, and return the last status."""
    full = _full_argv(argv)
    heredoc = len(full) >= 2 and full[1] == HEREDOC_KEYWORD
    if len(full) < 5:
        return display_error("Usage: ", HEREDOC_USAGE if heredoc else BONUS_USAGE, "", 1)
    if len(full) < 6 and heredoc:
        return display_error("Usage: ", HEREDOC_USAGE, "", 1)
    if not os.environ:
        return display_error("Unexpected error.", "", "", 1)
    return _run(full)


if __name__ == "__main__":
    sys.exit(main())