"""Minimal LSP server for stepcalc: diagnostics only.

Every non-blank line of a document is calculated as an independent
expression.
"""

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

from stepcalc import __version__, calculate
from stepcalc.errors import CalcError, EvalError

server = LanguageServer(
    "stepcalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def line_diagnostics(text: str, line: int) -> list[Diagnostic]:
    """Calculate one line and return its diagnostics (empty when it evaluates)."""
    if not text.strip():
        return []
    try:
        calculate(text)
    except CalcError as exc:
        # Spans index the normalized text; clamp them to the raw line
        start = min(exc.span.start, len(text))
        end = min(max(exc.span.end, start), len(text))
        if isinstance(exc, EvalError):
            severity = DiagnosticSeverity.Warning
        else:
            severity = DiagnosticSeverity.Error
        return [
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=start),
                    end=Position(line=line, character=end),
                ),
                message=exc.message,
                severity=severity,
                source="stepcalc",
                code=exc.kind,
            )
        ]
    return []


def _validate(ls: LanguageServer, uri: str) -> None:
    """Calculate every line of the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for index, text in enumerate(doc.source.split("\n")):
        diagnostics.extend(line_diagnostics(text.rstrip("\r"), index))

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
