"""Indented tree and token dumps for --debug and --format tree/tokens."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from yinsexp.ast import Sexp, Tuple
from yinsexp.tokens import Position, Token, TokenType

_KIND = {
    TokenType.DELIMITER: "Delimiter",
    TokenType.STRING: "String",
    TokenType.IDENTIFIER: "Identifier",
}


def dump_tree(sexp: Sexp, *, file: TextIO | None = None) -> None:
    """Print a human-readable Sexp tree to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    stack: list[tuple[Sexp, int]] = [(sexp, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Tuple):
            file.write(f"{_indent(depth)}Tuple {node.open}{node.close} @{_loc(node.position)}\n")
            stack.extend((child, depth + 1) for child in reversed(node.elements))
        else:
            file.write(f"{_indent(depth)}{_describe(node)}\n")


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one token per line to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    for tok in tokens:
        file.write(f"{_describe(tok)} [{tok.position.start}:{tok.position.end}]\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _loc(pos: Position) -> str:
    return f"{pos.line + 1}:{pos.col + 1}"


def _describe(tok: Token) -> str:
    return f"{_KIND[tok.type]}({tok.value!r}) @{_loc(tok.position)}"
