"""Minimal LSP server for yin source — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from yinsexp.ast import Tuple, iter_tuples
from yinsexp.delimiters import DEFAULT_REGISTRY, DelimiterRegistry
from yinsexp.errors import LexError, ParseError
from yinsexp.parser import parse
from yinsexp.tokens import Position as SourcePosition, TokenType

server = LanguageServer("yinsexp-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _range(pos: SourcePosition, source: str, width: int | None = None) -> Range:
    """Convert a source position to a single-line LSP range.

    Lines are already 0-based, but LSP characters count UTF-16 code units
    while ``pos.col`` counts code points, so columns are re-measured.
    """
    if width is None:
        width = max(1, pos.end - pos.start)
    line_start = pos.start - pos.col
    line_end = source.find("\n", pos.start)
    if line_end == -1:
        line_end = len(source)
    start_char = _utf16_len(source[line_start : pos.start])
    covered = source[pos.start : min(pos.start + width, line_end)]
    end_char = start_char + max(1, _utf16_len(covered))
    return Range(
        start=Position(line=pos.line, character=start_char),
        end=Position(line=pos.line, character=end_char),
    )


def _stray_closers(root: Tuple, source: str, registry: DelimiterRegistry) -> list[Diagnostic]:
    """Warn about closing delimiters that ended up as leaves."""
    diagnostics: list[Diagnostic] = []
    for node in iter_tuples(root):
        for child in node.elements:
            if isinstance(child, Tuple) or child.type is not TokenType.DELIMITER:
                continue
            if registry.is_close(child.value) and not registry.is_open(child.value):
                diagnostics.append(
                    Diagnostic(
                        range=_range(child.position, source),
                        message=f"unmatched closing delimiter '{child.value}'",
                        severity=DiagnosticSeverity.Warning,
                        source="yinsexp",
                    )
                )
    return diagnostics


def _validate(
    ls: LanguageServer, uri: str, registry: DelimiterRegistry = DEFAULT_REGISTRY
) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        root = parse(source, filename, registry)
    except LexError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(exc.position, source, width=1),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="yinsexp",
            )
        )
    except ParseError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(exc.position, source),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="yinsexp",
            )
        )
    else:
        diagnostics.extend(_stray_closers(root, source, registry))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
