"""Delimiter registry shared by the lexer and the tree builder."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class DelimiterRegistry:
    """Immutable table of delimiter pairs plus every recognized delimiter.

    ``pairs`` maps each opener to the closer it requires. ``delimiters`` holds
    openers, closers, and standalone delimiters alike; a standalone delimiter
    always lexes as its own token but never opens or closes a tuple.
    """

    pairs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    delimiters: frozenset[str] = frozenset()

    def is_delimiter(self, s: str) -> bool:
        return s in self.delimiters

    def is_delimiter_char(self, ch: str) -> bool:
        """Return True if the single character ch is a registered delimiter."""
        return len(ch) == 1 and ch in self.delimiters

    def is_open(self, s: str) -> bool:
        return s in self.pairs

    def is_close(self, s: str) -> bool:
        return s in self.pairs.values()

    def close_for(self, open: str) -> str | None:
        """Return the closer required by *open*, or None if it is not an opener."""
        return self.pairs.get(open)

    def matches(self, open: str, close: str) -> bool:
        matched = self.pairs.get(open)
        return matched is not None and matched == close

    @property
    def standalone(self) -> frozenset[str]:
        """Delimiters that are neither openers nor closers."""
        paired = set(self.pairs) | set(self.pairs.values())
        return frozenset(d for d in self.delimiters if d not in paired)


class DelimiterRegistryBuilder:
    """Collects pair and standalone registrations, then freezes them."""

    def __init__(self) -> None:
        self._pairs: dict[str, str] = {}
        self._delimiters: set[str] = set()

    def register_pair(self, open: str, close: str) -> DelimiterRegistryBuilder:
        _check_delimiter(open)
        _check_delimiter(close)
        self._delimiters.add(open)
        self._delimiters.add(close)
        self._pairs[open] = close
        return self

    def register_standalone(self, delim: str) -> DelimiterRegistryBuilder:
        _check_delimiter(delim)
        self._delimiters.add(delim)
        return self

    def build(self) -> DelimiterRegistry:
        return DelimiterRegistry(
            pairs=MappingProxyType(dict(self._pairs)),
            delimiters=frozenset(self._delimiters),
        )


def _check_delimiter(delim: str) -> None:
    # The lexer classifies one character at a time, and '"' always starts a string.
    if len(delim) != 1:
        raise ValueError(f"delimiter must be a single character: {delim!r}")
    if delim.isspace():
        raise ValueError(f"delimiter cannot be whitespace: {delim!r}")
    if delim == '"':
        raise ValueError("'\"' is reserved for string literals")


def default_builder() -> DelimiterRegistryBuilder:
    """Return a builder pre-loaded with ( ) { } [ ] pairs and standalone '.'."""
    return (
        DelimiterRegistryBuilder()
        .register_pair("(", ")")
        .register_pair("{", "}")
        .register_pair("[", "]")
        .register_standalone(".")
    )


DEFAULT_REGISTRY: DelimiterRegistry = default_builder().build()
