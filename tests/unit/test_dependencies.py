from __future__ import annotations

import pytest

from pdfmarkup.dependencies import ensure_document_dependencies
from pdfmarkup.exceptions import DependencyError


def test_ensure_document_dependencies_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("pdfmarkup.dependencies._is_module_available", lambda module_name: True)
    ensure_document_dependencies("extract")


def test_ensure_document_dependencies_raises(monkeypatch) -> None:
    monkeypatch.setattr("pdfmarkup.dependencies._is_module_available", lambda module_name: False)
    with pytest.raises(DependencyError, match="Missing runtime dependencies for 'highlight': pymupdf"):
        ensure_document_dependencies("highlight")
