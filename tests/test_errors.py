import io

import pytest

from pipekit.errors import PipexError, display_error, format_error


def test_format_error_joins_parts_after_program_name():
    assert format_error("infile", ": ", "No such file or directory") == (
        "pipex: infile: No such file or directory\n"
    )


def test_format_error_with_only_first_part():
    assert format_error("unexpected error") == "pipex: unexpected error\n"


def test_display_error_writes_and_returns_status():
    stream = io.StringIO()
    status = display_error("cat", ": ", "command not found", 127, stream)
    assert status == 127
    assert stream.getvalue() == "pipex: cat: command not found\n"


def test_display_error_matches_format_error():
    stream = io.StringIO()
    display_error("Usage: ", "./pipex file1 cmd1 cmd2 file2.", "", 1, stream)
    assert stream.getvalue() == format_error(
        "Usage: ", "./pipex file1 cmd1 cmd2 file2.", ""
    )


def test_display_error_defaults_to_stderr(capsys):
    result = display_error("fork", ": ", "failed")
    captured = capsys.readouterr()
    assert result == 1
    assert captured.err == "pipex: fork: failed\n"
    assert captured.out == ""


def test_pipex_error_carries_status():
    err = PipexError("pipe failed", 127)
    assert err.status == 127
    assert str(err) == "pipe failed"
    with pytest.raises(PipexError, match="pipe failed"):
        raise err


def test_pipex_error_default_status_is_one():
    assert PipexError("x").status == 1