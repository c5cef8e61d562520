"""Tokenizer for SSH config files."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from functools import partial

from .position import Position
from .token import Token, TokenType, is_key_char, is_key_start_char, is_space

_State = Callable[[], "_State | None"]


class _Lexer:
    """State-machine lexer; each state returns the next state or None."""

    def __init__(self, text: str) -> None:
        self._input = text
        self._idx = 0
        self._buffer: list[str] = []
        self._pending: list[Token] = []
        self._line = 1
        self._col = 1
        self._end_line = 1
        self._end_col = 1

    def tokens(self) -> Iterator[Token]:
        state: _State | None = self._lex_void
        while state is not None:
            state = state()
            yield from self._pending
            self._pending.clear()

    # character handling

    def _peek(self) -> str | None:
        if self._idx >= len(self._input):
            return None
        return self._input[self._idx]

    def _read(self) -> str | None:
        ch = self._peek()
        if ch == "\n":
            self._end_line += 1
            self._end_col = 1
        else:
            self._end_col += 1
        self._idx += 1
        return ch

    def _next(self) -> str | None:
        ch = self._read()
        if ch is not None:
            self._buffer.append(ch)
        return ch

    def _ignore(self) -> None:
        self._buffer = []
        self._line = self._end_line
        self._col = self._end_col

    def _skip(self) -> None:
        self._next()
        self._ignore()

    def _follow(self, expected: str) -> bool:
        return self._input.startswith(expected, self._idx)

    def _emit(self, kind: TokenType, value: str | None = None) -> None:
        if value is None:
            value = "".join(self._buffer)
        self._pending.append(Token(kind, value, Position(self._line, self._col)))
        self._ignore()

    # states

    def _comment_state(self, previous: _State) -> _State:
        return partial(self._lex_comment, previous)

    def _lex_comment(self, previous: _State) -> _State:
        chars = []
        while (ch := self._peek()) != "\n" and ch is not None:
            if ch == "\r" and self._follow("\r\n"):
                break
            chars.append(ch)
            self._next()
        self._emit(TokenType.COMMENT, "".join(chars))
        self._skip()
        return previous

    def _lex_rspace(self) -> _State:
        while is_space(self._peek()):
            self._skip()
        return self._lex_rvalue

    def _lex_equals(self) -> _State:
        while True:
            ch = self._peek()
            if ch == "=":
                self._emit(TokenType.EQUALS)
                self._skip()
                return self._lex_rspace
            if not is_space(ch):
                break
            self._skip()
        return self._lex_rvalue

    def _lex_key(self) -> _State:
        chars = []
        while is_key_char(ch := self._peek()):
            if is_space(ch) or ch == "=":
                self._emit(TokenType.KEY, "".join(chars))
                self._skip()
                return self._lex_equals
            chars.append(ch)
            self._next()
        self._emit(TokenType.KEY, "".join(chars))
        return self._lex_equals

    def _lex_rvalue(self) -> _State | None:
        chars = []
        while True:
            ch = self._peek()
            if ch == "\r" and self._follow("\r\n"):
                self._emit(TokenType.STRING, "".join(chars))
                self._skip()
                return self._lex_void
            if ch == "\n":
                self._emit(TokenType.STRING, "".join(chars))
                self._skip()
                return self._lex_void
            if ch == "#":
                self._emit(TokenType.STRING, "".join(chars))
                self._skip()
                return self._comment_state(self._lex_void)
            if ch is None:
                self._next()
                break
            chars.append(ch)
            self._next()
        self._emit(TokenType.EOF)
        return None

    def _lex_void(self) -> _State | None:
        while True:
            ch = self._peek()
            if ch == "#":
                self._skip()
                return self._comment_state(self._lex_void)
            if ch in ("\r", "\n"):
                self._emit(TokenType.EMPTY_LINE)
                self._skip()
                continue
            if is_space(ch):
                self._skip()
            if is_key_start_char(ch):
                return self._lex_key
            if ch is None:
                self._next()
                break
        self._emit(TokenType.EOF)
        return None


def lex_ssh(text: str | bytes) -> Iterator[Token]:
    """Yield the tokens of an SSH config document, ending with an EOF token.

    Bytes are decoded as UTF-8, with invalid sequences replaced.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    return _Lexer(text).tokens()