"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from stepcalc.lsp import _validate, line_diagnostics


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.calc") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="stepcalc", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Syntax errors → Error severity
# ---------------------------------------------------------------------------


class TestSyntaxErrors:
    def test_unsupported_character(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 + @")
        _validate(ls, "file:///test.calc")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "@" in d.message
        assert d.source == "stepcalc"
        assert d.code == "syntax_error"
        assert d.range.start.line == 0
        assert d.range.start.character == 4
        assert d.range.end.character == 5

    def test_missing_paren(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("(1 + 2")
        _validate(ls, "file:///test.calc")

        d = published[0].diagnostics[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "parenthesis" in d.message


# ---------------------------------------------------------------------------
# Eval errors → Warning severity
# ---------------------------------------------------------------------------


class TestEvalErrors:
    def test_division_by_zero(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 / 0")
        _validate(ls, "file:///test.calc")

        d = published[0].diagnostics[0]
        assert d.severity == DiagnosticSeverity.Warning
        assert d.code == "invalid_operation"
        assert d.range.start.character == 0
        assert d.range.end.character == 5


# ---------------------------------------------------------------------------
# Documents and lines
# ---------------------------------------------------------------------------


class TestDocument:
    def test_clean_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 + 2\n3 * 4\n")
        _validate(ls, "file:///test.calc")

        assert len(published) == 1
        assert published[0].diagnostics == []

    def test_error_on_second_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 + 2\n2 ^ 0.5\n")
        _validate(ls, "file:///test.calc")

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].range.start.line == 1
        assert diags[0].severity == DiagnosticSeverity.Warning

    def test_one_diagnostic_per_bad_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1 +\n\n4 / 0\r\n5")
        _validate(ls, "file:///test.calc")

        diags = published[0].diagnostics
        assert [d.range.start.line for d in diags] == [0, 2]


class TestLineDiagnostics:
    def test_blank_line(self) -> None:
        assert line_diagnostics("   ", 0) == []

    def test_valid_line(self) -> None:
        assert line_diagnostics("2 ** 10", 3) == []

    def test_span_clamped_to_line(self) -> None:
        diags = line_diagnostics("1 +", 0)
        assert len(diags) == 1
        assert diags[0].range.end.character <= 3
