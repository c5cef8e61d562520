"""Token kinds produced by the lexer and character classes it relies on."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .position import Position

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def _quote(text: str) -> str:
    """Return text in double quotes with non-printable characters escaped."""
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x20 or code == 0x7F:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    return '"' + "".join(parts) + '"'


class TokenType(enum.Enum):
    """Kinds of lexical tokens in an SSH config file."""

    ERROR = 0
    EOF = 1
    EMPTY_LINE = 2
    COMMENT = 3
    KEY = 4
    EQUALS = 5
    STRING = 6


@dataclass
class Token:
    """A single lexical token with its starting position."""

    type: TokenType
    value: str
    position: Position

    def __str__(self) -> str:
        if self.type is TokenType.EOF:
            return "EOF"
        return _quote(self.value)


def is_space(ch: str | None) -> bool:
    """Return True for a space or a tab."""
    return ch == " " or ch == "\t"


def is_key_start_char(ch: str | None) -> bool:
    """Return True if ch may begin a key; None stands for end of input."""
    return not (is_space(ch) or ch == "\r" or ch == "\n" or ch is None)


def is_key_char(ch: str | None) -> bool:
    """Return True if ch may appear in a key; None stands for end of input."""
    return not (ch == "\r" or ch == "\n" or ch is None or ch == "=")