# pipekit

`pipekit` connects commands through pipes, reading from one file and writing
to another, the way a shell runs `< infile cmd1 | cmd2 > outfile`.

## Installing

```
pip install .
```

## Command line

Two commands are installed.

`pipekit` runs exactly two commands:

```
pipekit infile "grep -i error" "wc -l" outfile
```

This behaves like `< infile grep -i error | wc -l > outfile`. The output file
is created or truncated. Any other number of arguments prints a usage line
and exits with status 1.

`pipekit-multi` runs two or more commands, and accepts a here-document in
place of the input file:

```
pipekit-multi infile "cat" "sort" "uniq -c" outfile
pipekit-multi here_doc END "tr a-z A-Z" "cat" outfile
```

With `here_doc`, lines are read from standard input, after a `here_doc > `
prompt written to standard output, until a line equal to the limiter (`END`
above) or the end of input. The lines before the limiter are stored in a
temporary file `.heredoc.tmp` in the current directory, which becomes the
first command's input and is removed when the pipeline ends. The output file
is appended to rather than truncated. `pipekit-multi` refuses to run with an
empty environment.

Each command string is split on spaces. Text in single or double quotes is
kept as one argument, for example `"awk '{print $1}'"`; an unterminated quote
is an error. A command is used as given if it names an executable file,
otherwise it is looked up in the directories of `PATH`. If there is no `PATH`,
the directories `/usr/local/sbin`, `/usr/local/bin`, `/usr/sbin`, `/usr/bin`,
`/sbin` and `/bin` are searched instead.

The exit status is the status of the last command in the pipeline. A command
that cannot be found reports `command not found` and counts as 127. A missing
input file or an output file that cannot be opened is reported, and the
command that needed it counts as 1; the other commands still run. Error
messages go to standard error, prefixed with `pipex: `.

## Library use

```python
from pipekit.pipeline import Pipeline

argv = ["pipekit", "in.txt", "sort", "uniq", "out.txt"]
with Pipeline(argv, env={"PATH": "/usr/bin:/bin"}) as pipeline:
    status = pipeline.run()
```

`Pipeline` opens its input and output files when it is created; `run()`
starts every command, waits for all of them, closes the files and returns the
last command's status. `close()` closes the files without running anything.
`pipekit.pipeline.read_heredoc` collects a here-document into a file on its
own. Failures that stop a pipeline are raised as `pipekit.errors.PipexError`,
which carries the exit status in `status`.

Other modules can be used on their own:

- `pipekit.cmdsplit.split_quotes` splits a command string into arguments.
- `pipekit.pathsearch.command_path` resolves a command against `PATH`;
  `extract_path`, `path_dirs`, `find_executable` and `find_exe_hardcoded` do
  the individual steps.
- `pipekit.errors.format_error` and `display_error` build and write the
  `pipex: ...` diagnostic lines.
- `pipekit.printf.sprintf` and `pipekit.printf.printf` format text with the
  conversions `%c %s %p %d %i %u %x %X %%`. They support the flags `- 0 # +`
  and space, a field width and a precision. Integers are taken as 32-bit
  values. `pipekit.formatting` holds the padding and digit helpers they use,
  and the `FormatSpec` dataclass.

```python
from pipekit.printf import sprintf

sprintf("[%5d|%-4s|%#x]", 42, "ab", 255)   # '[   42|ab  |0xff]'
```

## What it does not do

Command strings are not interpreted by a shell: there are no redirections,
globs, variable expansion or escapes inside them, and only the space
character separates arguments. The output file is always the last argument,
and only one input file or here-document can be given.

## Running the tests

```
pip install ".[test]"
pytest
```