"""Line and column positions within an SSH config document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A 1-indexed line and column within a document."""

    line: int
    col: int

    def invalid(self) -> bool:
        """Return True if either coordinate is zero or negative."""
        return self.line <= 0 or self.col <= 0

    def __str__(self) -> str:
        return f"({self.line}, {self.col})"