"""Minimal LSP server for component templates — diagnostics only."""

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

from jsxtpl import __version__
from jsxtpl.checks import check_tags
from jsxtpl.errors import ScanError
from jsxtpl.scanner import scan
from jsxtpl.spans import Span

server = LanguageServer(
    "jsxtpl-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _range(span: Span) -> Range:
    """Convert a 1-based Span to a 0-based LSP Range."""
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        ast = scan(source, filename)
    except ScanError as exc:
        # The build copies such files through untranslated rather than failing
        diagnostics.append(
            Diagnostic(
                range=_range(exc.span),
                message=f"{exc.message} (template will be passed through untranslated)",
                severity=DiagnosticSeverity.Warning,
                source="jsxtpl",
            )
        )
    else:
        for issue in check_tags(ast):
            diagnostics.append(
                Diagnostic(
                    range=_range(issue.span),
                    message=issue.message,
                    severity=DiagnosticSeverity.Information,
                    source="jsxtpl",
                )
            )

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
