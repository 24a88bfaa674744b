"""Locating the executable for a command through PATH or a fixed list of directories."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import TextIO, Union

from pipekit.errors import display_error

HARDCODED_PATHS = (
    "/usr/local/sbin/",
    "/usr/local/bin/",
    "/usr/sbin/",
    "/usr/bin/",
    "/sbin/",
    "/bin/",
)

COMMAND_NOT_FOUND = 127

Environment = Union[Mapping[str, str], Iterable[str]]


def _entries(env: Environment) -> Iterable[str]:
    if isinstance(env, Mapping):
        return (f"{key}={value}" for key, value in env.items())
    return env


def _is_executable(path: str) -> bool:
    return os.access(path, os.F_OK | os.X_OK)


def extract_path(env: Environment) -> str | None:
    """Return the value of PATH from ``KEY=value`` entries, or None if absent.

    The search stops at the first empty entry.
    """
    for entry in _entries(env):
        if not entry:
            break
        if entry.startswith("PATH="):
            return entry[len("PATH="):]
    return None


def path_dirs(env: Environment) -> list[str] | None:
    """Return the PATH directories, each ending in '/', or None if PATH is unset.

    Empty components of PATH are skipped.
    """
    value = extract_path(env)
    if value is None:
        return None
    return [part + "/" for part in value.split(":") if part]


def find_executable(cmd: str, dirs: Iterable[str]) -> str | None:
    """Return the first ``dir + cmd`` that exists and is executable, or None."""
    for directory in dirs:
        candidate = directory + cmd
        if _is_executable(candidate):
            return candidate
    return None


def find_exe_hardcoded(cmd: str) -> str | None:
    """Look for ``cmd`` in the standard system directories."""
    return find_executable(cmd, HARDCODED_PATHS)


def command_path(
    cmd: str | None,
    env: Environment,
    display_name: str | None = None,
    stream: TextIO | None = None,
) -> str | None:
    """Resolve ``cmd`` to an executable path.

    A ``cmd`` that is itself executable is returned as is. Otherwise it is
    looked up in PATH, or in the standard directories when PATH is unset.
    When nothing is found, "command not found" is reported for
    ``display_name`` (``cmd`` by default) and None is returned.
    """
    name = display_name if display_name is not None else (cmd or "")
    if cmd and _is_executable(cmd):
        return cmd
    found = None
    if cmd:
        dirs = path_dirs(env)
        found = find_exe_hardcoded(cmd) if dirs is None else find_executable(cmd, dirs)
    if found is None:
        display_error(name, ": ", "command not found", COMMAND_NOT_FOUND, stream)
    return found