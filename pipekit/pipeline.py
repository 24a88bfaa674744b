"""Running a chain of commands connected by pipes, from an input file or a here-document."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterable, Mapping
from typing import TextIO, Union

from pipekit.cmdsplit import split_quotes
from pipekit.errors import PipexError, display_error
from pipekit.pathsearch import COMMAND_NOT_FOUND, command_path

HEREDOC_KEYWORD = "here_doc"
HEREDOC_FILE = ".heredoc.tmp"
HEREDOC_PROMPT = "here_doc > "
FILE_PERMISSIONS = 0o644

Environment = Union[Mapping[str, str], Iterable[str]]


def read_heredoc(
    limiter: str,
    source: TextIO,
    path: str = HEREDOC_FILE,
    prompt_stream: TextIO | None = None,
) -> str:
    """Copy lines from ``source`` into ``path`` until a line equal to ``limiter``.

    A prompt is written to ``prompt_stream`` (stdout by default) before each
    read, and once more after the limiter line. Lines after the limiter are
    left unread. Returns ``path``; an OSError is raised if it cannot be created.
    """
    prompt = sys.stdout if prompt_stream is None else prompt_stream
    terminator = limiter + "\n"
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, FILE_PERMISSIONS)
    with os.fdopen(fd, "w") as out:
        while True:
            prompt.write(HEREDOC_PROMPT)
            prompt.flush()
            line = source.readline()
            if not line:
                break
            if line == terminator:
                prompt.write(HEREDOC_PROMPT)
                prompt.flush()
                break
            out.write(line)
    return path


def _env_dict(env: Environment) -> dict[str, str]:
    if isinstance(env, Mapping):
        return dict(env)
    result: dict[str, str] = {}
    for entry in env:
        key, sep, value = entry.partition("=")
        if sep:
            result[key] = value
    return result


class Pipeline:
    """The commands of ``argv`` joined by pipes between an input and an output file.

    ``argv`` is laid out as ``[program, infile, cmd1, ..., cmdN, outfile]``, or
    ``[program, "here_doc", LIMITER, cmd1, ..., cmdN, outfile]`` to read the
    input from ``stdin`` up to the limiter and append to the output file.
    """

    heredoc_path = HEREDOC_FILE

    def __init__(
        self,
        argv: Iterable[str],
        env: Environment | None = None,
        stdin: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.argv = list(argv)
        if len(self.argv) < 2:
            raise ValueError("a pipeline needs an input, commands and an output")
        self.env: Environment = os.environ if env is None else env
        self.stdin = sys.stdin if stdin is None else stdin
        self.stderr = stderr
        self.heredoc = self.argv[1] == HEREDOC_KEYWORD
        self.cmd_count = len(self.argv) - 3 - int(self.heredoc)
        if self.cmd_count < 1:
            raise ValueError("a pipeline needs at least one command")
        self.input_fd: int | None = None
        self.output_fd: int | None = None
        try:
            self.open_input()
            self.open_output()
        except BaseException:
            self._cleanup()
            raise

    @property
    def commands(self) -> list[str]:
        """The command strings, in pipeline order."""
        start = 2 + int(self.heredoc)
        return self.argv[start:-1]

    @property
    def output_path(self) -> str:
        return self.argv[-1]

    def open_input(self) -> None:
        """Open the input file, or collect the here-document and open that.

        A missing input file is reported and leaves the input unset; a
        here-document that cannot be written or read raises PipexError.
        """
        if self.heredoc:
            try:
                read_heredoc(self.argv[2], self.stdin, self.heredoc_path, sys.stdout)
                self.input_fd = os.open(self.heredoc_path, os.O_RDONLY)
            except OSError as exc:
                reason = exc.strerror or str(exc)
                display_error(HEREDOC_KEYWORD, ": ", reason, 1, self.stderr)
                raise PipexError(f"{HEREDOC_KEYWORD}: {reason}", 1) from exc
        else:
            try:
                self.input_fd = os.open(self.argv[1], os.O_RDONLY)
            except OSError as exc:
                display_error(self.argv[1], ": ", exc.strerror or str(exc), 1, self.stderr)
                self.input_fd = None

    def open_output(self) -> None:
        """Open the output file: appended for a here-document, truncated otherwise."""
        mode = os.O_APPEND if self.heredoc else os.O_TRUNC
        try:
            self.output_fd = os.open(
                self.output_path, os.O_WRONLY | os.O_CREAT | mode, FILE_PERMISSIONS
            )
        except OSError as exc:
            display_error(self.output_path, ": ", exc.strerror or str(exc), 1, self.stderr)
            self.output_fd = None

    def _launch(
        self, command: str, stdin: int | None, stdout: int | None
    ) -> subprocess.Popen | int:
        try:
            args = split_quotes(command)
        except ValueError as exc:
            display_error("unexpected error", "", "", 1, self.stderr)
            raise PipexError("unexpected error", 1) from exc
        path = command_path(args[0] if args else None, self.env, command, self.stderr)
        if path is None:
            return COMMAND_NOT_FOUND
        if stdin is None or stdout is None:
            return 1
        try:
            return subprocess.Popen(
                args,
                executable=path,
                stdin=stdin,
                stdout=stdout,
                env=_env_dict(self.env),
            )
        except OSError as exc:
            display_error(args[0], ": ", exc.strerror or str(exc), 1, self.stderr)
            return 1

    @staticmethod
    def _wait(outcome: subprocess.Popen | int) -> int:
        if isinstance(outcome, int):
            return outcome
        code = outcome.wait()
        return code if code >= 0 else 1

    def run(self) -> int:
        """Start every command, wait for all of them, and return the last one's status.

        A command that is not found counts as 127; one that could not be
        connected to its input or output, or was killed by a signal, as 1.
        """
        pipes = [os.pipe() for _ in range(self.cmd_count - 1)]
        outcomes: list[subprocess.Popen | int] = []
        statuses: list[int] = []
        last = self.cmd_count - 1
        try:
            for index, command in enumerate(self.commands):
                stdin = self.input_fd if index == 0 else pipes[index - 1][0]
                stdout = self.output_fd if index == last else pipes[index][1]
                outcomes.append(self._launch(command, stdin, stdout))
        finally:
            for read_end, write_end in pipes:
                os.close(read_end)
                os.close(write_end)
            self._cleanup()
            statuses = [self._wait(outcome) for outcome in outcomes]
        return statuses[-1]

    def close(self) -> None:
        """Close the input and output files; calling it again does nothing."""
        for name in ("input_fd", "output_fd"):
            fd = getattr(self, name)
            if fd is not None:
                try:
                    os.close(fd)
                except OSError:
                    pass
                setattr(self, name, None)

    def _cleanup(self) -> None:
        self.close()
        if self.heredoc:
            try:
                os.remove(self.heredoc_path)
            except FileNotFoundError:
                pass

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._cleanup()