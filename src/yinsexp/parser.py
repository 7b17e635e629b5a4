"""yinsexp parser — folds matched delimiter pairs from the token stream into a tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from yinsexp.ast import Sexp, Tuple
from yinsexp.delimiters import DEFAULT_REGISTRY, DelimiterRegistry
from yinsexp.errors import FileReadError, UnclosedDelimiterError
from yinsexp.lexer import Lexer
from yinsexp.tokens import EndOfInput, Position, Token, TokenType

ROOT_OPEN = "["
ROOT_CLOSE = "]"


@dataclass(slots=True)
class _Frame:
    """One open delimiter awaiting its closer."""

    opener: Token
    closer: str
    children: list[Sexp] = field(default_factory=list)


class Parser:
    """Builds Sexp trees from a Lexer, one top-level expression per next_sexp() call.

    Nesting is tracked on an explicit stack of frames rather than the Python
    call stack, so input depth is limited only by memory.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<string>",
        registry: DelimiterRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._source = source
        self._filename = filename
        self._registry = registry
        self._lexer = Lexer(source, filename, registry)

    @classmethod
    def from_file(
        cls, path: str | Path, registry: DelimiterRegistry = DEFAULT_REGISTRY
    ) -> Parser:
        return cls(read_source(path), str(path), registry)

    def next_sexp(self) -> Sexp | EndOfInput:
        """Return the next complete top-level Sexp, or EndOfInput."""
        frames: list[_Frame] = []

        while True:
            tok = self._lexer.next_token()

            if isinstance(tok, EndOfInput):
                if frames:
                    raise self._unclosed(frames[-1])
                return tok

            node: Sexp = tok
            if tok.type is TokenType.DELIMITER:
                # Openers win, so a symmetric pair such as |...| always nests.
                closer = self._registry.close_for(tok.value)
                if closer is not None:
                    frames.append(_Frame(tok, closer))
                    continue
                if frames and tok.value == frames[-1].closer:
                    node = self._close(frames.pop(), tok)

            if not frames:
                return node
            frames[-1].children.append(node)

    def parse(self) -> Tuple:
        """Parse the whole source into a synthetic root tuple."""
        elements: list[Sexp] = []
        while True:
            sexp = self.next_sexp()
            if isinstance(sexp, EndOfInput):
                break
            elements.append(sexp)
        root_pos = Position(self._filename, 0, len(self._source), 0, 0)
        return Tuple(tuple(elements), ROOT_OPEN, ROOT_CLOSE, root_pos)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _close(self, frame: _Frame, closer: Token) -> Tuple:
        start = frame.opener.position
        span = Position(
            self._filename, start.start, closer.position.end, start.line, start.col
        )
        return Tuple(tuple(frame.children), frame.opener.value, closer.value, span)

    def _unclosed(self, frame: _Frame) -> UnclosedDelimiterError:
        return UnclosedDelimiterError(
            frame.opener.value, frame.closer, frame.opener.position, self._source
        )


def read_source(path: str | Path) -> str:
    """Read a UTF-8 source file, raising FileReadError if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise FileReadError(str(path), reason) from exc


def parse(
    source: str,
    filename: str = "<string>",
    registry: DelimiterRegistry = DEFAULT_REGISTRY,
) -> Tuple:
    """Convenience function: parse source text and return the root tuple."""
    return Parser(source, filename, registry).parse()


def parse_file(path: str | Path, registry: DelimiterRegistry = DEFAULT_REGISTRY) -> Tuple:
    """Read and parse a source file."""
    return Parser.from_file(path, registry).parse()
