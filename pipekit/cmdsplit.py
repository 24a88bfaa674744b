"""Splitting a command string into arguments, honouring single and double quotes."""

from __future__ import annotations

_QUOTES = ("'", '"')


def split_quotes(text: str) -> list[str]:
    """Split ``text`` on spaces; a quoted run becomes one argument without its quotes.

    Only the space character separates arguments. A token is closed by the
    first space after it, so spaces left at the very end of the string after
    that produce one final empty argument. An unterminated quote raises
    ValueError.
    """
    args: list[str] = []
    pos = 0
    end = len(text)
    while pos < end:
        while pos < end and text[pos] == " ":
            pos += 1
        if pos < end and text[pos] in _QUOTES:
            quote = text[pos]
            closing = text.find(quote, pos + 1)
            if closing == -1:
                raise ValueError(f"unterminated {quote} quote in {text!r}")
            args.append(text[pos + 1 : closing])
            pos = closing + 1
        else:
            space = text.find(" ", pos)
            if space == -1:
                args.append(text[pos:])
                pos = end
            else:
                args.append(text[pos:space])
                pos = space + 1
    return args