"""Token types, source positions, and the end-of-input marker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    DELIMITER = auto()  # single registered delimiter char: ( ) { } [ ] .
    STRING = auto()  # "..." with quotes stripped, escapes left as written
    IDENTIFIER = auto()  # maximal run of non-whitespace, non-delimiter chars


@dataclass(frozen=True, slots=True)
class Position:
    """Source range: 0-based character offsets (end exclusive), 0-based line/col of start."""

    file: str
    start: int
    end: int
    line: int
    col: int

    def label(self) -> str:
        """Human-readable ``file:line:col`` with 1-based line and column."""
        return f"{self.file}:{self.line + 1}:{self.col + 1}"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: delimiter, string literal, or identifier."""

    type: TokenType
    value: str
    position: Position


@dataclass(frozen=True, slots=True)
class EndOfInput:
    """Returned instead of a token (or Sexp) once the source is exhausted."""

    position: Position


def is_whitespace(ch: str) -> bool:
    """Return True if ch separates tokens."""
    return ch.isspace()
