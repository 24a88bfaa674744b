"""Building blocks for printf-style conversions: digits, precision, signs and padding."""

from __future__ import annotations

import sys
from dataclasses import dataclass

HEXALOW = "0123456789abcdef"
HEXAUP = "0123456789ABCDEF"

INT_MAX = 2147483647
INT_MIN = -2147483648

NULLSTRING = "(null)"
NULLPOINTER = "0x0" if sys.platform == "darwin" else "(nil)"

_SIGNS = ("-", " ", "+")


@dataclass
class FormatSpec:
    """One parsed conversion specification such as ``%-08.3d``."""

    minus: bool = False
    zero: bool = False
    precision: int = -1
    hash: bool = False
    space: bool = False
    plus: bool = False
    field_width: int = 0
    specifier: str = ""


def itoa_base(n: int, base: int, hex_up: bool = False) -> str:
    """Return the digits of the non-negative integer ``n`` in ``base`` (2 to 16)."""
    if not 2 <= base <= 16:
        raise ValueError(f"base must be between 2 and 16, not {base}")
    if n < 0:
        raise ValueError("itoa_base takes a non-negative number")
    alphabet = HEXAUP if hex_up else HEXALOW
    digits = []
    while True:
        n, rem = divmod(n, base)
        digits.append(alphabet[rem])
        if n == 0:
            break
    return "".join(reversed(digits))


def precision_format(text: str, spec: FormatSpec) -> str:
    """Pad the digits of ``text`` with leading zeros up to the precision.

    An unset precision (-1) counts as a precision of 1; a leading minus
    sign is kept in front of the added zeros.
    """
    precision = 1 if spec.precision == -1 else spec.precision
    offset = 1 if text.startswith("-") else 0
    digits = len(text) - offset
    if precision > digits:
        return text[:offset] + "0" * (precision - digits) + text[offset:]
    return text


def plus_space_format(n: int, text: str, spec: FormatSpec) -> str:
    """Prefix ``text`` with '+' or ' ' for a non-negative ``n`` if the flags ask for it."""
    if n >= 0 and spec.plus:
        return "+" + text
    if n >= 0 and spec.space:
        return " " + text
    return text


def add_hex_prefix(text: str, hex_up: bool) -> str:
    """Prefix ``text`` with ``0X`` or ``0x``."""
    return ("0X" if hex_up else "0x") + text


def zero_padding(text: str, spec: FormatSpec) -> str:
    """Pad ``text`` with zeros to the field width, keeping a leading sign first."""
    width = spec.field_width
    if width <= len(text):
        return text
    fill = "0" * (width - len(text))
    if text[:1] in _SIGNS:
        return text[0] + fill + text[1:]
    return fill + text


def field_width(text: str, spec: FormatSpec) -> str:
    """Pad ``text`` to the field width with zeros or spaces as the flags say."""
    width = spec.field_width
    if width <= len(text):
        return text
    if spec.zero and spec.precision == -1 and not spec.minus:
        return zero_padding(text, spec)
    if spec.minus:
        return text.ljust(width)
    return text.rjust(width)