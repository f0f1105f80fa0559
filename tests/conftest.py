"""Pytest marker auto-assignment by folder and shared document fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from pdfmarkup import logger
from pdfmarkup.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    HighlightDrawError,
    PageIndexOutOfRangeError,
)
from pdfmarkup.typing.models import PageSize

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pdfmarkup.typing.models import DocRect


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Build a PDF whose page `i` carries the text `page-i`."""
    fitz = pytest.importorskip("fitz")

    def _make(
        pages: int = 3,
        *,
        sizes: Sequence[tuple[float, float]] | None = None,
        texts: Sequence[str] | None = None,
    ) -> bytes:
        document = fitz.open()
        for index in range(pages):
            width, height = sizes[index] if sizes else (200.0, 300.0)
            page = document.new_page(width=width, height=height)
            text = texts[index] if texts else f"page-{index}"
            if text:
                page.insert_text((20, 40), text, fontsize=12)
        data = document.tobytes()
        document.close()
        return data

    return _make


@dataclass
class FakePage:
    size: PageSize
    draws: list[tuple[DocRect, tuple[float, float, float], float]] = field(default_factory=list)
    fail_draw: bool = False

    def get_size(self) -> PageSize:
        return self.size

    def draw_rectangle(self, rect: DocRect, *, color: tuple[float, float, float], opacity: float) -> None:
        if self.fail_draw:
            raise HighlightDrawError(message="paint failed")
        self.draws.append((rect, color, opacity))


@dataclass
class FakeDocument:
    pages: list[FakePage]
    closed: bool = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page(self, index: int) -> FakePage:
        if not 0 <= index < len(self.pages):
            raise PageIndexOutOfRangeError(index=index, page_count=len(self.pages))
        return self.pages[index]

    def close(self) -> None:
        self.closed = True


@dataclass
class FakeCodec:
    """In-memory codec recording every call."""

    sizes: list[tuple[float, float]] = field(default_factory=lambda: [(400.0, 600.0)] * 3)
    fail_load: bool = False
    fail_save: bool = False
    fail_draw: bool = False
    calls: list[str] = field(default_factory=list)
    loaded: list[FakeDocument] = field(default_factory=list)
    created: list[FakeDocument] = field(default_factory=list)

    def load(self, data: bytes) -> FakeDocument:
        self.calls.append("load")
        if self.fail_load:
            raise DocumentLoadError(message="broken")
        pages = [FakePage(PageSize(width=w, height=h), fail_draw=self.fail_draw) for w, h in self.sizes]
        document = FakeDocument(pages=pages)
        self.loaded.append(document)
        return document

    def create(self) -> FakeDocument:
        self.calls.append("create")
        document = FakeDocument(pages=[])
        self.created.append(document)
        return document

    def copy_pages(self, source: FakeDocument, indices: Sequence[int]) -> list[FakePage]:
        self.calls.append("copy_pages")
        return [source.get_page(index) for index in indices]

    def add_page(self, dest: FakeDocument, page: FakePage) -> None:
        self.calls.append("add_page")
        dest.pages.append(page)

    def save(self, document: FakeDocument) -> bytes:
        self.calls.append("save")
        if self.fail_save:
            raise DocumentSaveError(message="disk full")
        return f"pages={document.page_count}".encode()


@pytest.fixture
def fake_codec() -> FakeCodec:
    return FakeCodec()
