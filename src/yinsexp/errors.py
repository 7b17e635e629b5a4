"""Error types with formatted source context."""

from __future__ import annotations

from yinsexp.tokens import Position


class SexpError(Exception):
    """Base class for every input error raised while reading or parsing source."""


class FileReadError(SexpError):
    """Raised when the source file cannot be read; nothing has been lexed yet."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: failed to read file: {self.path}\n  reason: {self.reason}"


class _PositionedError(SexpError):
    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self) -> str:
        # Only "\n" ends a line, matching how the lexer counts lines.
        lines = self.source.split("\n")
        line_idx = self.position.line
        col = self.position.col + 1

        # Build the source line (strip a CRLF remainder for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Underline the span while it stays on the reported line
        width = self.position.end - self.position.start
        underline_len = max(1, min(width, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(line_idx + 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {self.position.label()}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(_PositionedError):
    """Raised on the first lexing error, with position and source context."""


class RunawayStringError(LexError):
    """A string literal was opened but input ended before its closing quote."""

    def __init__(self, position: Position, source: str) -> None:
        super().__init__(
            f"runaway string starting at offset {position.start}", position, source
        )


class ParseError(_PositionedError):
    """Raised on the first structural error, with position and source context."""


class UnclosedDelimiterError(ParseError):
    """An opening delimiter never met its registered closer before input ended."""

    def __init__(self, delimiter: str, expected: str, position: Position, source: str) -> None:
        self.delimiter = delimiter
        self.expected = expected
        super().__init__(
            f"unclosed delimiter '{delimiter}' at offset {position.start}, expected '{expected}'",
            position,
            source,
        )
