"""yinsexp lexer — pulls one token at a time from source text."""

from __future__ import annotations

from collections.abc import Iterator

from yinsexp.delimiters import DEFAULT_REGISTRY, DelimiterRegistry
from yinsexp.errors import RunawayStringError
from yinsexp.tokens import EndOfInput, Position, Token, TokenType, is_whitespace


class Lexer:
    """Tokenize source text on demand; the cursor only ever moves forward."""

    def __init__(
        self,
        source: str,
        filename: str = "<string>",
        registry: DelimiterRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._source = source
        self._filename = filename
        self._registry = registry
        self._pos = 0
        self._line = 0
        self._col = 0

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if isinstance(tok, EndOfInput):
                return
            yield tok

    def next_token(self) -> Token | EndOfInput:
        """Return the next token, or EndOfInput once only whitespace remains."""
        while self._pos < len(self._source) and is_whitespace(self._peek()):
            self._advance()

        if self._pos >= len(self._source):
            return EndOfInput(self._position(self._pos, self._line, self._col))

        ch = self._peek()

        if self._registry.is_delimiter_char(ch):
            return self._lex_delimiter()

        if ch == '"':
            return self._lex_string()

        return self._lex_identifier()

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        return self._source[self._pos]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 0
        else:
            self._col += 1
        return ch

    def _position(self, start: int, line: int, col: int) -> Position:
        return Position(self._filename, start, self._pos, line, col)

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _lex_delimiter(self) -> Token:
        start, line, col = self._pos, self._line, self._col
        ch = self._advance()
        return Token(TokenType.DELIMITER, ch, self._position(start, line, col))

    def _lex_string(self) -> Token:
        quote = (self._pos, self._line, self._col)
        self._advance()  # consume opening quote

        start, line, col = self._pos, self._line, self._col
        # A quote preceded by a backslash is escaped. "\\" followed by a quote
        # therefore does not close the string.
        while self._pos < len(self._source) and not (
            self._peek() == '"' and self._source[self._pos - 1] != "\\"
        ):
            self._advance()

        if self._pos >= len(self._source):
            q_start, q_line, q_col = quote
            raise RunawayStringError(self._position(q_start, q_line, q_col), self._source)

        content = self._source[start : self._pos]
        tok = Token(TokenType.STRING, content, self._position(start, line, col))
        self._advance()  # consume closing quote
        return tok

    def _lex_identifier(self) -> Token:
        start, line, col = self._pos, self._line, self._col
        while self._pos < len(self._source):
            ch = self._peek()
            if is_whitespace(ch) or self._registry.is_delimiter_char(ch):
                break
            self._advance()
        text = self._source[start : self._pos]
        return Token(TokenType.IDENTIFIER, text, self._position(start, line, col))


def tokenize(
    source: str,
    filename: str = "<string>",
    registry: DelimiterRegistry = DEFAULT_REGISTRY,
) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return list(Lexer(source, filename, registry))
