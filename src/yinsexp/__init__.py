"""Lexer and parser turning yin source text into S-expression trees."""

from __future__ import annotations

from yinsexp.ast import Sexp, Tuple, flatten, iter_leaves
from yinsexp.delimiters import (
    DEFAULT_REGISTRY,
    DelimiterRegistry,
    DelimiterRegistryBuilder,
    default_builder,
)
from yinsexp.errors import (
    FileReadError,
    LexError,
    ParseError,
    RunawayStringError,
    SexpError,
    UnclosedDelimiterError,
)
from yinsexp.lexer import Lexer, tokenize
from yinsexp.parser import Parser, parse, parse_file
from yinsexp.render import render
from yinsexp.tokens import EndOfInput, Position, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "DelimiterRegistry",
    "DelimiterRegistryBuilder",
    "EndOfInput",
    "FileReadError",
    "LexError",
    "Lexer",
    "ParseError",
    "Parser",
    "Position",
    "RunawayStringError",
    "Sexp",
    "SexpError",
    "Token",
    "TokenType",
    "Tuple",
    "UnclosedDelimiterError",
    "default_builder",
    "flatten",
    "iter_leaves",
    "parse",
    "parse_file",
    "render",
    "tokenize",
]
