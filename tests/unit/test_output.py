"""Tests for the YAML document writer."""

from __future__ import annotations

import io

from podwatcher.output import DocumentWriter


class TestDocumentWriter:
    def test_document_framing(self) -> None:
        out = io.StringIO()
        DocumentWriter(out).write("kind: Pod\n")
        assert out.getvalue() == "---\nkind: Pod\n\n"

    def test_documents_in_order(self) -> None:
        out = io.StringIO()
        writer = DocumentWriter(out)
        writer.write("a: 1\n")
        writer.write("b: 2\n")
        assert out.getvalue() == "---\na: 1\n\n---\nb: 2\n\n"
        assert writer.count == 2
