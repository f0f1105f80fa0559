"""State of the document a user is currently working on."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from pdfmarkup import logger
from pdfmarkup.annotation_store import AnnotationStore
from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec
from pdfmarkup.capture import capture_selection
from pdfmarkup.commit import acommit_highlights
from pdfmarkup.exceptions import (
    NoActiveDocumentError,
    OperationInProgressError,
    PageIndexOutOfRangeError,
)
from pdfmarkup.extraction import aextract_pages
from pdfmarkup.page_selection import PageSelection
from pdfmarkup.settings import DEFAULT_RENDER_WIDTH
from pdfmarkup.typing.enums import OutputKind
from pdfmarkup.typing.models import OutputArtifact

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from pdfmarkup.typing.models import ClientRect, Highlight
    from pdfmarkup.typing.protocol import DocumentCodec, PageRendererCapability


class DocumentSession:
    """Active document with its highlights and page selection.

    Loading another document discards every highlight and the page selection
    of the previous one. Only one commit or extraction may run at a time.
    """

    def __init__(
        self,
        *,
        renderer: PageRendererCapability | None = None,
        codec: DocumentCodec | None = None,
        render_width: int | None = None,
    ) -> None:
        """Initialize session.

        Args:
            renderer (PageRendererCapability | None): Renderer displaying the pages.
            codec (DocumentCodec | None): Document codec, PyMuPDF by default.
            render_width (int | None): Display width; taken from the renderer when omitted.
        """
        self.renderer = renderer
        self._codec = codec or PyMuPDFCodec()
        if render_width is None:
            render_width = renderer.render_width if renderer is not None else DEFAULT_RENDER_WIDTH
        self.render_width = render_width

        self._data: bytes | None = None
        self._filename: str | None = None
        self._page_count = 0
        self._annotations = AnnotationStore()
        self._selection = PageSelection()
        self._busy = False

    @property
    def is_loaded(self) -> bool:
        """Return whether a document is active."""
        return self._data is not None

    @property
    def is_busy(self) -> bool:
        """Return whether a commit or extraction is running."""
        return self._busy

    @property
    def annotations(self) -> AnnotationStore:
        """Return the highlights of the active document."""
        return self._annotations

    @property
    def selection(self) -> PageSelection:
        """Return the pages picked for extraction."""
        return self._selection

    @property
    def page_count(self) -> int:
        """Return the page count of the active document."""
        return self._page_count

    @property
    def filename(self) -> str:
        """Return the file name of the active document.

        Raises:
            NoActiveDocumentError: If no document is loaded.
        """
        if self._filename is None:
            raise NoActiveDocumentError
        return self._filename

    @property
    def original_bytes(self) -> bytes:
        """Return the unmodified bytes of the active document.

        Raises:
            NoActiveDocumentError: If no document is loaded.
        """
        if self._data is None:
            raise NoActiveDocumentError
        return self._data

    def load(self, data: bytes, filename: str) -> int:
        """Make a document the active one.

        The previous document, its highlights and its page selection are
        dropped only once the new bytes have been opened successfully.

        Args:
            data (bytes): Serialized document.
            filename (str): Original file name, used to name produced documents.

        Raises:
            DocumentLoadError: If the bytes cannot be opened.
            OperationInProgressError: If a commit or extraction is running.

        Returns:
            int: Number of pages of the new document.
        """
        if self._busy:
            raise OperationInProgressError(operation="load")

        handle = self._codec.load(data)
        try:
            page_count = handle.page_count
        finally:
            handle.close()

        self._data = data
        self._filename = filename
        self._page_count = page_count
        self._annotations = AnnotationStore()
        self._selection = PageSelection()
        logger.info("Document loaded", extra={"document": filename, "pages": page_count})
        return page_count

    def _check_page(self, page_index: int) -> None:
        """Ensure a document is loaded and owns the page."""
        if not self.is_loaded:
            raise NoActiveDocumentError
        if not 0 <= page_index < self._page_count:
            raise PageIndexOutOfRangeError(index=page_index, page_count=self._page_count)

    def capture(
        self,
        selection_rects: Sequence[ClientRect],
        container_rect: ClientRect,
        page_index: int,
        *,
        text: str | None = None,
    ) -> Highlight | None:
        """Record a completed text selection as a highlight.

        Args:
            selection_rects (Sequence[ClientRect]): Bounding rectangles of the selection.
            container_rect (ClientRect): Bounds of the rendered page container.
            page_index (int): Zero-based index of the displayed page.
            text (str | None): Selected text.

        Raises:
            NoActiveDocumentError: If no document is loaded.
            PageIndexOutOfRangeError: If the page is not part of the document.

        Returns:
            Highlight | None: Stored highlight, or None when the selection does not qualify.
                The caller should clear its native selection when a highlight is returned.
        """
        self._check_page(page_index)
        highlight = capture_selection(selection_rects, container_rect, page_index, text=text)
        if highlight is not None:
            self._annotations.add(highlight)
        return highlight

    def remove_highlight(self, highlight_id: str) -> None:
        """Drop a stored highlight; unknown ids are ignored."""
        self._annotations.remove(highlight_id)

    def toggle_page(self, page_index: int) -> bool:
        """Toggle a page in the extraction selection.

        Args:
            page_index (int): Zero-based page index.

        Raises:
            NoActiveDocumentError: If no document is loaded.
            PageIndexOutOfRangeError: If the page is not part of the document.

        Returns:
            bool: Whether the page is selected after the call.
        """
        self._check_page(page_index)
        return self._selection.toggle(page_index)

    @asynccontextmanager
    async def _operation(self, name: str) -> AsyncIterator[bytes]:
        """Hold the busy flag while an operation runs on the original bytes."""
        if self._busy:
            raise OperationInProgressError(operation=name)
        data = self.original_bytes
        self._busy = True
        try:
            yield data
        finally:
            self._busy = False

    async def commit(self) -> OutputArtifact:
        """Bake the stored highlights into a new document.

        Raises:
            OperationInProgressError: If another operation is running.
            EmptyAnnotationSetError: If no highlight is stored.
            DocumentLoadError: If the document cannot be reopened.
            HighlightDrawError: If a rectangle cannot be painted.
            DocumentSaveError: If the result cannot be serialized.

        Returns:
            OutputArtifact: `highlighted-<name>` document.
        """
        async with self._operation("commit") as data:
            output = await acommit_highlights(
                data,
                self._annotations.all(),
                self.render_width,
                codec=self._codec,
            )
        return OutputArtifact(
            filename=OutputKind.HIGHLIGHTED.filename_for(self.filename),
            data=output,
            page_count=self._page_count,
        )

    async def extract(self, page_indices: Sequence[int] | None = None) -> OutputArtifact:
        """Build a document from selected pages.

        Args:
            page_indices (Sequence[int] | None): Pages in output order; defaults
                to the ascending page selection.

        Raises:
            OperationInProgressError: If another operation is running.
            EmptySelectionError: If no page is selected.
            PageIndexOutOfRangeError: If a page is not part of the document.
            DocumentLoadError: If the document cannot be reopened.
            DocumentSaveError: If the result cannot be serialized.

        Returns:
            OutputArtifact: `extracted-<name>` document.
        """
        indices = list(self._selection.snapshot() if page_indices is None else page_indices)
        async with self._operation("extract") as data:
            output = await aextract_pages(data, indices, codec=self._codec)
        return OutputArtifact(
            filename=OutputKind.EXTRACTED.filename_for(self.filename),
            data=output,
            page_count=len(indices),
        )
