"""Hosts, patterns and the lines that make up a parsed SSH config file."""

from __future__ import annotations

import os
import re
import socket
from dataclasses import dataclass, field
from typing import Protocol, Union, runtime_checkable

from .position import Position
from .validators import SSHConfigError

# Regular-expression metacharacters that are taken literally in a host
# pattern; "*" and "?" are wildcards and handled separately.
_SPECIAL = frozenset("\\.+()|[]{}^$")


def homedir() -> str:
    """Return the current user's home directory."""
    try:
        import pwd

        return pwd.getpwuid(os.getuid()).pw_dir
    except (ImportError, KeyError, AttributeError, OSError):
        return os.environ.get("HOME", "")


def _substitute_tilde(value: str) -> str:
    return value.replace("~", homedir(), 1)


class Pattern:
    """A read-only host pattern from a Host declaration.

    "*" matches zero or more characters, "?" matches at most one, and a
    leading "!" negates the pattern.
    """

    __slots__ = ("_text", "_regex", "_negated")

    def __init__(self, text: str) -> None:
        if text == "":
            raise SSHConfigError("ssh_config: empty pattern")
        negated = text.startswith("!")
        if negated:
            text = text[1:]
        parts = ["^"]
        for ch in text:
            if ch == "*":
                parts.append(".*")
            elif ch == "?":
                parts.append(".?")
            elif ch in _SPECIAL:
                parts.append("\\" + ch)
            else:
                parts.append(re.escape(ch) if ch.isspace() else ch)
        parts.append(r"\Z")
        try:
            regex = re.compile("".join(parts))
        except re.error as exc:
            raise SSHConfigError(str(exc)) from exc
        self._text = text
        self._regex = regex
        self._negated = negated

    @property
    def negated(self) -> bool:
        """True if this pattern excludes the hosts it matches."""
        return self._negated

    @property
    def regex(self) -> re.Pattern[str]:
        """The compiled expression for this pattern."""
        return self._regex

    def search(self, alias: str) -> bool:
        """Return True if alias matches the pattern, ignoring negation."""
        return self._regex.match(alias) is not None

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        prefix = "!" if self._negated else ""
        return f"Pattern({prefix + self._text!r})"


@dataclass
class KV:
    """A key/value line, possibly followed by a comment."""

    key: str
    value: str
    space_after_value: str = ""
    comment: str = ""
    has_equals: bool = False
    leading_space: int = 0
    position: Position = Position(0, 0)

    def __str__(self) -> str:
        equals = " = " if self.has_equals else " "
        line = " " * self.leading_space + self.key + equals + self.value + self.space_after_value
        if self.comment:
            line += "#" + self.comment
        return line


@dataclass
class Empty:
    """A line holding only whitespace or a comment."""

    comment: str = ""
    leading_space: int = 0
    position: Position = Position(0, 0)

    def __str__(self) -> str:
        if not self.comment:
            return ""
        return " " * self.leading_space + "#" + self.comment


@runtime_checkable
class _Lookup(Protocol):
    """A node that resolves keys itself, such as an Include directive."""

    position: Position

    def get(self, alias: str, key: str) -> str: ...


Node = Union[KV, Empty, _Lookup]


def _value_from_node(node: object, alias: str, key: str) -> str | None:
    """Return the value node gives for key, or None if it gives none."""
    if isinstance(node, Empty):
        return None
    if isinstance(node, KV):
        lkey = node.key.lower()
        if lkey == "match":
            raise SSHConfigError("can't handle Match directives")
        if lkey == key.lower():
            return _substitute_tilde(node.value)
        return None
    getter = getattr(node, "get", None)
    if callable(getter):
        value = getter(alias, key)
        if value:
            return _substitute_tilde(value)
    return None


@dataclass
class Host:
    """A Host declaration and the lines that follow it."""

    patterns: list[Pattern] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)
    eol_comment: str = ""
    space_before_comment: str = ""
    has_equals: bool = False
    leading_space: int = 0
    implicit: bool = False

    def matches(self, alias: str) -> bool:
        """Return True if this Host applies to alias.

        A matching negated pattern excludes the alias regardless of the
        other patterns.
        """
        found = False
        for pattern in self.patterns:
            if pattern.search(alias):
                if pattern.negated:
                    return False
                found = True
        return found

    def _find(self, alias: str, key: str) -> str:
        for node in self.nodes:
            value = _value_from_node(node, alias, key)
            if value is not None:
                return value
        return ""

    def percent(self, alias: str, value: str) -> str:
        """Expand %-tokens in value for the given alias."""
        out: list[str] = []
        saw_percent = False
        for ch in value:
            if saw_percent:
                saw_percent = False
                if ch == "d":
                    out.append(homedir())
                elif ch == "h":
                    out.append(self._find(alias, "HostName"))
                elif ch == "i":
                    getuid = getattr(os, "getuid", None)
                    out.append(str(getuid()) if getuid else "-1")
                elif ch == "L":
                    try:
                        out.append(socket.gethostname())
                    except OSError as exc:
                        out.append(f"%!L({exc})")
                elif ch == "n":
                    out.append(alias)
                elif ch == "p":
                    out.append(self._find(alias, "Port"))
                elif ch == "r":
                    out.append(self._find(alias, "User"))
                elif ch == "u":
                    out.append(os.environ.get("USER", ""))
                elif ch == "%":
                    out.append("%")
                else:
                    out.append("%!" + ch)
                continue
            if ch != "%":
                out.append(ch)
                continue
            saw_percent = True
        if saw_percent:
            out.append("%!(NOVERB)")
        return "".join(out)

    def __str__(self) -> str:
        parts: list[str] = []
        if not self.implicit:
            parts.append(" " * self.leading_space)
            parts.append("Host")
            parts.append(" = " if self.has_equals else " ")
            parts.append(" ".join(str(p) for p in self.patterns))
            parts.append(self.space_before_comment)
            if self.eol_comment:
                parts.append("#" + self.eol_comment)
            parts.append("\n")
        for node in self.nodes:
            parts.append(str(node))
            parts.append("\n")
        return "".join(parts)


@dataclass
class Config:
    """A parsed SSH config file.

    The first host is the implicit "Host *" block that opens every file.
    """

    hosts: list[Host] = field(default_factory=list)
    depth: int = 0
    position: Position = Position(0, 0)

    def _matching_hosts(self, alias: str) -> list[Host]:
        return [host for host in self.hosts if host.matches(alias)]

    def get(self, alias: str, key: str) -> str:
        """Return the first value for key in a host matching alias, or ""."""
        for host in self._matching_hosts(alias):
            for node in host.nodes:
                value = _value_from_node(node, alias, key)
                if value is not None:
                    return host.percent(alias, value)
        return ""

    def get_all(self, alias: str, key: str) -> list[str]:
        """Return every value for key in hosts matching alias, in file order."""
        found: list[str] = []
        for host in self._matching_hosts(alias):
            for node in host.nodes:
                value = _value_from_node(node, alias, key)
                if value is not None:
                    found.append(host.percent(alias, value))
        return found

    def __str__(self) -> str:
        return "".join(str(host) for host in self.hosts)

    def __bytes__(self) -> bytes:
        return str(self).encode("utf-8")


MATCH_ALL = Pattern("*")


def new_config() -> Config:
    """Return an empty Config holding only the implicit "Host *" block."""
    return Config(hosts=[Host(patterns=[MATCH_ALL], nodes=[], implicit=True)])