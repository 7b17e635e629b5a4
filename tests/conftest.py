"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from yinsexp.ast import Sexp, Tuple
from yinsexp.lexer import tokenize
from yinsexp.parser import parse
from yinsexp.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source, "test.yin")

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns the root Tuple."""

    def _parse(source: str, filename: str = "test.yin") -> Tuple:
        return parse(source, filename)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_tuple(node: Sexp, open: str, close: str, num_elements: int | None = None) -> Tuple:
    """Assert basic properties of a Tuple node and return it."""
    assert isinstance(node, Tuple), f"Expected Tuple, got {type(node).__name__}"
    assert node.open == open, f"Expected open '{open}', got '{node.open}'"
    assert node.close == close, f"Expected close '{close}', got '{node.close}'"
    if num_elements is not None:
        assert len(node.elements) == num_elements, (
            f"Expected {num_elements} elements, got {len(node.elements)}"
        )
    return node


def assert_leaf(node: Sexp, tt: TokenType, value: str) -> Token:
    """Assert that a node is a leaf token of the given type and value."""
    assert isinstance(node, Token), f"Expected Token, got {type(node).__name__}"
    assert node.type == tt, f"Expected {tt}, got {node.type}"
    assert node.value == value, f"Expected value {value!r}, got {node.value!r}"
    return node
