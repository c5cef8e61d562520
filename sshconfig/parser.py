"""Parsing SSH config tokens into Config objects, including Include files."""

from __future__ import annotations

import fnmatch
import os
import threading
from collections.abc import Iterable, Iterator
from typing import IO, Union

from .lexer import lex_ssh
from .nodes import KV, Config, Empty, Host, Pattern, homedir, new_config
from .position import Position
from .token import Token, TokenType, _quote
from .validators import DepthExceededError, SSHConfigError

MAX_RECURSE_DEPTH = 5

_GLOB_MAGIC = frozenset("*?[")


def _has_magic(path: str) -> bool:
    return any(ch in _GLOB_MAGIC for ch in path)


def _glob(pattern: str) -> list[str]:
    """Expand a shell pattern; "*" also matches names starting with a dot."""
    if not _has_magic(pattern):
        return [pattern] if os.path.lexists(pattern) else []
    directory, name = os.path.split(pattern)
    directories = _glob(directory) if _has_magic(directory) else [directory]
    name = name.replace("[^", "[!")
    results: list[str] = []
    for base in directories:
        try:
            entries = sorted(os.listdir(base or "."))
        except OSError:
            continue
        results.extend(
            os.path.join(base, entry)
            for entry in entries
            if fnmatch.fnmatchcase(entry, name)
        )
    return results


def _resolve_directive(directive: str, system: bool) -> str:
    if os.path.isabs(directive):
        return directive
    if system:
        return os.path.normpath(os.path.join("/etc/ssh", directive))
    if directive.startswith("~/") or directive.startswith("~\\"):
        return os.path.normpath(os.path.join(homedir(), directive[2:]))
    return os.path.normpath(os.path.join(homedir(), ".ssh", directive))


class Include:
    """An Include directive and the config files it pulled in.

    At most five levels of nested Include directives are parsed.
    """

    def __init__(
        self,
        directives: list[str],
        has_equals: bool,
        position: Position,
        comment: str,
        depth: int,
        matches: list[str],
        files: dict[str, Config],
    ) -> None:
        self.comment = comment
        self.directives = list(directives)
        self.has_equals = has_equals
        self.position = position
        self.leading_space = position.col - 1
        self.depth = depth
        self.matches = list(matches)
        self.files = dict(files)
        self._lock = threading.Lock()

    def get(self, alias: str, key: str) -> str:
        """Return the first value for key in the included files, or ""."""
        with self._lock:
            for name in self.matches:
                value = self.files[name].get(alias, key)
                if value:
                    return value
        return ""

    def get_all(self, alias: str, key: str) -> list[str]:
        """Return every value for key across the included files."""
        values: list[str] = []
        with self._lock:
            for name in self.matches:
                values.extend(self.files[name].get_all(alias, key))
        return values

    def __str__(self) -> str:
        equals = " = " if self.has_equals else " "
        line = " " * self.leading_space + "Include" + equals + " ".join(self.directives)
        if self.comment:
            line += " #" + self.comment
        return line

    def __repr__(self) -> str:
        return f"Include({self.directives!r}, position={self.position!r})"


def new_include(
    directives: list[str],
    has_equals: bool,
    pos: Position,
    comment: str,
    system: bool,
    depth: int,
) -> Include:
    """Build an Include, parsing every file its directives match right away."""
    if depth > MAX_RECURSE_DEPTH:
        raise DepthExceededError()
    found: list[str] = []
    for directive in directives:
        found.extend(_glob(_resolve_directive(directive, system)))
    matches = list(dict.fromkeys(found))
    files = {name: parse_with_depth(name, depth) for name in matches}
    return Include(directives, has_equals, pos, comment, depth, matches, files)


class _Parser:
    def __init__(self, tokens: Iterable[Token], config: Config, system: bool, depth: int) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._buffer: list[Token] = []
        self._config = config
        self._system = system
        self._depth = depth

    def _peek(self) -> Token | None:
        if not self._buffer:
            tok = next(self._tokens, None)
            if tok is None:
                return None
            self._buffer.append(tok)
        return self._buffer[0]

    def _take(self) -> Token | None:
        if self._buffer:
            return self._buffer.pop(0)
        return next(self._tokens, None)

    @staticmethod
    def _fail(tok: Token, message: str) -> SSHConfigError:
        return SSHConfigError(f"{tok.position}: {message}")

    def run(self) -> None:
        while (tok := self._peek()) is not None:
            if tok.type in (TokenType.COMMENT, TokenType.EMPTY_LINE):
                self._parse_comment()
            elif tok.type is TokenType.KEY:
                self._parse_kv()
            elif tok.type is TokenType.EOF:
                return
            else:
                raise self._fail(tok, f"unexpected token {_quote(str(tok))}\n")

    def _parse_kv(self) -> None:
        key = self._take()
        value = self._take()
        if key is None or value is None:
            raise SSHConfigError("ssh_config: unexpected end of input")
        has_equals = False
        if value.type is TokenType.EQUALS:
            has_equals = True
            value = self._take()
            if value is None:
                raise SSHConfigError("ssh_config: unexpected end of input")
        comment = ""
        following = self._peek()
        if (
            following is not None
            and following.type is TokenType.COMMENT
            and following.position.line == value.position.line
        ):
            comment = self._take().value

        lkey = key.value.lower()
        if lkey == "match":
            raise self._fail(value, "ssh_config: Match directive parsing is unsupported")
        if lkey == "host":
            self._add_host(value, comment, has_equals)
            return

        last_host = self._config.hosts[-1]
        if lkey == "include":
            try:
                include = new_include(
                    value.value.split(" "),
                    has_equals,
                    key.position,
                    comment,
                    self._system,
                    self._depth + 1,
                )
            except DepthExceededError:
                raise
            except (OSError, SSHConfigError) as exc:
                raise self._fail(value, f"Error parsing Include directive: {exc}") from exc
            last_host.nodes.append(include)
            return

        short = value.value.rstrip()
        last_host.nodes.append(
            KV(
                key=key.value,
                value=short,
                space_after_value=value.value[len(short):],
                comment=comment,
                has_equals=has_equals,
                leading_space=key.position.col - 1,
                position=key.position,
            )
        )

    def _add_host(self, value: Token, comment: str, has_equals: bool) -> None:
        patterns: list[Pattern] = []
        for text in value.value.split(" "):
            if not text:
                continue
            try:
                patterns.append(Pattern(text))
            except SSHConfigError as exc:
                raise self._fail(value, f"Invalid host pattern: {exc}") from exc
        trimmed = value.value.rstrip()
        self._config.hosts.append(
            Host(
                patterns=patterns,
                nodes=[],
                eol_comment=comment,
                space_before_comment=value.value[len(trimmed):],
                has_equals=has_equals,
            )
        )

    def _parse_comment(self) -> None:
        tok = self._take()
        self._config.hosts[-1].nodes.append(
            Empty(
                comment=tok.value,
                # the column points past the "#"
                leading_space=tok.position.col - 2,
                position=tok.position,
            )
        )


def parse_ssh(tokens: Iterable[Token], system: bool, depth: int) -> Config:
    """Build a Config from a token stream."""
    config = new_config()
    config.position = Position(1, 1)
    _Parser(tokens, config, system, depth).run()
    return config


def _decode(data: Union[str, bytes], system: bool, depth: int) -> Config:
    return parse_ssh(lex_ssh(data), system, depth)


def decode(reader: IO) -> Config:
    """Read a whole stream and parse it as an SSH config file."""
    return _decode(reader.read(), False, 0)


def decode_bytes(data: Union[str, bytes]) -> Config:
    """Parse data as an SSH config file."""
    return _decode(data, False, 0)


def is_system(filename: str) -> bool:
    """Return True if filename lies under /etc/ssh."""
    return os.path.normpath(filename).startswith("/etc/ssh")


def parse_with_depth(filename: str, depth: int) -> Config:
    """Read and parse filename at the given Include nesting depth."""
    with open(filename, "rb") as handle:
        data = handle.read()
    return _decode(data, is_system(filename), depth)


def parse_file(filename: str) -> Config:
    """Read and parse the SSH config file at filename."""
    return parse_with_depth(filename, 0)