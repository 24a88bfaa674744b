"""A small printf: parses ``%`` conversions and renders them with the formatting helpers."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator
from typing import Any, TextIO

from pipekit.formatting import (
    NULLPOINTER,
    NULLSTRING,
    FormatSpec,
    add_hex_prefix,
    field_width,
    itoa_base,
    plus_space_format,
    precision_format,
)

_SPEC_RE = re.compile(r"([-0# +]*)(\d*)(?:\.(\d*))?", re.DOTALL)

_UINT_MASK = 0xFFFFFFFF
_PTR_MASK = 0xFFFFFFFFFFFFFFFF


def _to_int32(n: int) -> int:
    return ((n + 2**31) & _UINT_MASK) - 2**31


def parse_format_specifier(fmt: str, pos: int) -> tuple[FormatSpec, int]:
    """Parse the conversion that starts at ``pos`` (just after the '%').

    Returns the parsed spec and the index of its conversion character; at
    the end of ``fmt`` that index is ``len(fmt)`` and the specifier is empty.
    """
    match = _SPEC_RE.match(fmt, pos)
    flags, width, precision = match.group(1), match.group(2), match.group(3)
    spec = FormatSpec(
        minus="-" in flags,
        zero="0" in flags,
        hash="#" in flags,
        space=" " in flags,
        plus="+" in flags,
    )
    if width:
        spec.field_width = int(width)
    if precision is not None:
        spec.precision = int(precision) if precision else 0
    end = match.end()
    spec.specifier = fmt[end : end + 1]
    return spec, end


def format_char(c: int | str, spec: FormatSpec) -> str:
    """Render one character, space-padded to the field width."""
    if isinstance(c, str):
        if len(c) != 1:
            raise TypeError("%c takes a single character")
        char = c
    else:
        char = chr(c & 0xFF)
    width = max(spec.field_width, 1)
    return char.ljust(width) if spec.minus else char.rjust(width)


def format_str(s: str | None, spec: FormatSpec) -> str:
    """Render a string, cut to the precision and space-padded to the field width."""
    if s is None:
        s = NULLSTRING
    elif not isinstance(s, str):
        raise TypeError("%s takes a string or None")
    if 0 <= spec.precision < len(s):
        s = s[: spec.precision]
    return s.ljust(spec.field_width) if spec.minus else s.rjust(spec.field_width)


def _render_number(digits: str, n: int, spec: FormatSpec) -> str:
    text = precision_format(digits, spec)
    text = plus_space_format(n, text, spec)
    return field_width(text, spec)


def format_int(n: int, spec: FormatSpec) -> str:
    """Render a signed 32-bit integer."""
    n = _to_int32(n)
    digits = "" if n == 0 and spec.precision == 0 else str(n)
    return _render_number(digits, n, spec)


def format_uint(n: int, spec: FormatSpec) -> str:
    """Render an unsigned 32-bit integer in decimal."""
    n &= _UINT_MASK
    digits = "" if n == 0 and spec.precision == 0 else itoa_base(n, 10)
    return _render_number(digits, n, spec)


def format_hex(n: int, hex_up: bool, spec: FormatSpec) -> str:
    """Render an unsigned 32-bit integer in hexadecimal."""
    n &= _UINT_MASK
    if n == 0 and spec.precision == 0:
        digits = ""
    else:
        digits = itoa_base(n, 16, hex_up)
        if n != 0 and spec.hash:
            digits = add_hex_prefix(digits, hex_up)
    return _render_number(digits, n, spec)


def format_ptr(n: int, hex_up: bool, spec: FormatSpec) -> str:
    """Render a pointer value as ``0x...``, or the null-pointer text for zero.

    Right-aligned pointers are padded two columns short of the field width.
    """
    n &= _PTR_MASK
    text = NULLPOINTER if n == 0 else "0x" + itoa_base(n, 16, hex_up)
    if spec.minus:
        return text.ljust(spec.field_width)
    return " " * max(0, spec.field_width - len(text) - 2) + text


def handle_specifier(spec: FormatSpec, args: Iterator[Any]) -> str:
    """Render one conversion, taking its value from the ``args`` iterator.

    An unknown conversion character renders as nothing.
    """
    kind = spec.specifier
    if kind == "%":
        return "%"
    if kind not in ("c", "s", "p", "d", "i", "u", "x", "X"):
        return ""
    try:
        value = next(args)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{kind}") from None
    if kind == "c":
        return format_char(value, spec)
    if kind == "s":
        return format_str(value, spec)
    if kind == "p":
        return format_ptr(value, False, spec)
    if kind in ("d", "i"):
        return format_int(value, spec)
    if kind == "u":
        return format_uint(value, spec)
    return format_hex(value, kind == "X", spec)


def sprintf(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with every conversion replaced by the rendered argument."""
    values = iter(args)
    parts = []
    pos = 0
    while True:
        percent = fmt.find("%", pos)
        if percent == -1:
            parts.append(fmt[pos:])
            break
        parts.append(fmt[pos:percent])
        spec, spec_pos = parse_format_specifier(fmt, percent + 1)
        parts.append(handle_specifier(spec, values))
        pos = spec_pos + 1
        if pos > len(fmt):
            break
    return "".join(parts)


def printf(fmt: str, *args: Any, file: TextIO | None = None) -> int:
    """Write the formatted text to ``file`` (stdout by default) and return its length."""
    text = sprintf(fmt, *args)
    stream = sys.stdout if file is None else file
    stream.write(text)
    return len(text)