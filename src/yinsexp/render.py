"""Compact one-line rendering of a Sexp tree (diagnostic, not a serialization format)."""

from __future__ import annotations

from yinsexp.ast import Sexp, Tuple
from yinsexp.tokens import Token, TokenType


def render(sexp: Sexp) -> str:
    """Render *sexp* as source-like text with single spaces between elements."""
    out: list[str] = []
    # Pending work: nodes to render, or literal text to append.
    stack: list[Sexp | str] = [sexp]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, Tuple):
            out.append(item.open)
            stack.append(item.close)
            for i in range(len(item.elements) - 1, -1, -1):
                stack.append(item.elements[i])
                if i > 0:
                    stack.append(" ")
        else:
            out.append(_render_token(item))
    return "".join(out)


def _render_token(tok: Token) -> str:
    if tok.type is TokenType.STRING:
        return f'"{tok.value}"'
    return tok.value
