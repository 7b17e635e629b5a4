"""Sexp tree node types and depth-first traversal helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from yinsexp.tokens import Position, Token


@dataclass(frozen=True, slots=True)
class Tuple:
    """A delimited group: the literal open/close strings and the children between them."""

    elements: tuple[Sexp, ...]
    open: str
    close: str
    position: Position


Sexp = Token | Tuple


def iter_leaves(sexp: Sexp) -> Iterator[Token]:
    """Yield every leaf token in document order."""
    stack: list[Sexp] = [sexp]
    while stack:
        node = stack.pop()
        if isinstance(node, Tuple):
            stack.extend(reversed(node.elements))
        else:
            yield node


def flatten(sexp: Sexp) -> Iterator[str]:
    """Yield token text depth-first, emitting each tuple's open and close delimiters."""
    # Entries are either nodes to expand or closing delimiter strings to emit.
    stack: list[Sexp | str] = [sexp]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            yield node
        elif isinstance(node, Tuple):
            yield node.open
            stack.append(node.close)
            stack.extend(reversed(node.elements))
        else:
            yield node.value


def iter_tuples(sexp: Sexp) -> Iterator[Tuple]:
    """Yield every Tuple in the tree, outermost first."""
    stack: list[Sexp] = [sexp]
    while stack:
        node = stack.pop()
        if isinstance(node, Tuple):
            yield node
            stack.extend(reversed(node.elements))
