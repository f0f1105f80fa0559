"""Document codec backed by PyMuPDF."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

try:
    import fitz
except Exception:  # pragma: no cover - optional dependency at runtime
    fitz: Any
    fitz = None

from pdfmarkup.exceptions import (
    DependencyError,
    DocumentLoadError,
    DocumentSaveError,
    HighlightDrawError,
    PageIndexOutOfRangeError,
)
from pdfmarkup.logging import get_logger
from pdfmarkup.typing.models import DocRect, PageSize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmarkup.typing.protocol import DocumentHandle, PageHandle

logger = get_logger(__name__)


def _require_fitz() -> None:
    if fitz is None:
        raise DependencyError(missing_package=["pymupdf"], message="document codec")


class PyMuPDFPage:
    """Page of a PyMuPDF document.

    PyMuPDF addresses pages from their top-left corner; this handle accepts
    native bottom-left anchored rectangles and flips them on draw.
    """

    def __init__(self, document: fitz.Document, index: int) -> None:
        """Initialize page handle.

        Args:
            document (fitz.Document): Open PyMuPDF document.
            index (int): Zero-based page index.
        """
        self.document = document
        self.index = index

    @property
    def _page(self) -> fitz.Page:
        """Return the live PyMuPDF page."""
        return self.document[self.index]

    def get_size(self) -> PageSize:
        """Return the native page size.

        Returns:
            PageSize: Page width and height in PDF points.
        """
        rect = self._page.rect
        return PageSize(width=rect.width, height=rect.height)

    def draw_rectangle(
        self,
        rect: DocRect,
        *,
        color: tuple[float, float, float],
        opacity: float,
    ) -> None:
        """Paint a borderless filled rectangle into the page content stream.

        Args:
            rect (DocRect): Rectangle in native bottom-left anchored space.
            color (tuple[float, float, float]): RGB fill color.
            opacity (float): Fill opacity.

        Raises:
            HighlightDrawError: If PyMuPDF cannot paint the rectangle.
        """
        page = self._page
        page_rect = page.rect
        top = page_rect.y0 + page_rect.height - rect.y - rect.height
        target = fitz.Rect(
            page_rect.x0 + rect.x,
            top,
            page_rect.x0 + rect.x + rect.width,
            top + rect.height,
        )
        try:
            page.draw_rect(target, color=None, fill=color, fill_opacity=opacity, width=0, overlay=True)
        except Exception as exc:
            raise HighlightDrawError(message=f"Failed to draw highlight on page {self.index}: {exc}") from exc


class PyMuPDFDocument:
    """Open PyMuPDF document."""

    def __init__(self, document: fitz.Document) -> None:
        """Initialize document handle."""
        self.document = document

    @property
    def page_count(self) -> int:
        """Return the number of pages."""
        return self.document.page_count

    def get_page(self, index: int) -> PyMuPDFPage:
        """Return the page at a zero-based index.

        Args:
            index (int): Zero-based page index.

        Raises:
            PageIndexOutOfRangeError: If the document has no such page.

        Returns:
            PyMuPDFPage: Page handle.
        """
        if not 0 <= index < self.page_count:
            raise PageIndexOutOfRangeError(index=index, page_count=self.page_count)
        return PyMuPDFPage(self.document, index)

    def close(self) -> None:
        """Release the underlying PyMuPDF document."""
        self.document.close()


class PyMuPDFCodec:
    """Load, assemble and serialize PDF documents with PyMuPDF."""

    def load(self, data: bytes) -> PyMuPDFDocument:
        """Open PDF bytes.

        Args:
            data (bytes): Serialized PDF.

        Raises:
            DocumentLoadError: If the bytes are not a readable, unencrypted PDF.

        Returns:
            PyMuPDFDocument: Open document.
        """
        _require_fitz()
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise DocumentLoadError(message=f"Failed to load document: {exc}") from exc

        if document.needs_pass:
            document.close()
            raise DocumentLoadError(message="Failed to load document: encrypted documents are not supported")
        if not document.is_pdf:
            document.close()
            raise DocumentLoadError(message="Failed to load document: not a PDF")
        logger.debug("Document loaded", extra={"pages": document.page_count, "size": len(data)})
        return PyMuPDFDocument(document)

    def create(self) -> PyMuPDFDocument:
        """Create an empty document.

        Returns:
            PyMuPDFDocument: New document without pages.
        """
        _require_fitz()
        return PyMuPDFDocument(fitz.open())

    def copy_pages(self, source: DocumentHandle, indices: Sequence[int]) -> list[PageHandle]:
        """Reference the source pages to copy, in output order.

        The structural copy (content streams, resources and their cross
        references) happens in `add_page`, which lets PyMuPDF rewrite object
        numbers for the destination document.

        Args:
            source (DocumentHandle): Document opened by this codec.
            indices (Sequence[int]): Zero-based indices; duplicates allowed.

        Raises:
            PageIndexOutOfRangeError: If an index does not address a source page.

        Returns:
            list[PageHandle]: One page reference per index.
        """
        return [source.get_page(index) for index in indices]

    def add_page(self, dest: DocumentHandle, page: PageHandle) -> None:
        """Append a page referenced by `copy_pages` to `dest`.

        Args:
            dest (DocumentHandle): Destination document opened by this codec.
            page (PageHandle): Page reference returned by `copy_pages`.
        """
        target = _unwrap(dest)
        origin = _unwrap_page(page)
        target.insert_pdf(origin.document, from_page=origin.index, to_page=origin.index)

    def save(self, document: DocumentHandle) -> bytes:
        """Serialize a document.

        Args:
            document (DocumentHandle): Document opened by this codec.

        Raises:
            DocumentSaveError: If PyMuPDF cannot write the document.

        Returns:
            bytes: Serialized PDF.
        """
        target = _unwrap(document)
        try:
            return target.tobytes(garbage=3, deflate=True)
        except Exception as exc:
            raise DocumentSaveError(message=f"Failed to save document: {exc}") from exc


def _unwrap(document: DocumentHandle) -> fitz.Document:
    if not isinstance(document, PyMuPDFDocument):
        message = f"Expected a PyMuPDF document handle, got {type(document).__name__}"
        raise TypeError(message)
    return document.document


def _unwrap_page(page: PageHandle) -> PyMuPDFPage:
    if not isinstance(page, PyMuPDFPage):
        message = f"Expected a PyMuPDF page handle, got {type(page).__name__}"
        raise TypeError(message)
    return page
