"""Capability interfaces for document codecs and page renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmarkup.typing.models import DocRect, PageSize, RenderedPage, TextSpan


class PageHandle(Protocol):
    """Page of an open document."""

    def get_size(self) -> PageSize:
        """Return the native page size.

        Returns:
            PageSize: Width and height in native units.
        """

    def draw_rectangle(
        self,
        rect: DocRect,
        *,
        color: tuple[float, float, float],
        opacity: float,
    ) -> None:
        """Draw a filled rectangle into the page content.

        Args:
            rect: Rectangle in native document space.
            color: RGB fill color, each channel in `[0, 1]`.
            opacity: Fill opacity in `[0, 1]`.

        Raises:
            HighlightDrawError: If the backend cannot paint the rectangle.
        """


class DocumentHandle(Protocol):
    """Open document."""

    @property
    def page_count(self) -> int:
        """Return the number of pages."""

    def get_page(self, index: int) -> PageHandle:
        """Return the page at a zero-based index.

        Args:
            index: Zero-based page index.

        Returns:
            PageHandle: Page handle.
        """

    def close(self) -> None:
        """Release resources held by the document."""


class DocumentCodec(Protocol):
    """Load, build and serialize documents."""

    def load(self, data: bytes) -> DocumentHandle:
        """Open document bytes.

        Args:
            data: Serialized document.

        Returns:
            DocumentHandle: Open document.
        """

    def create(self) -> DocumentHandle:
        """Create an empty document.

        Returns:
            DocumentHandle: New document without pages.
        """

    def copy_pages(self, source: DocumentHandle, indices: Sequence[int]) -> list[PageHandle]:
        """Copy pages out of a source document.

        Args:
            source: Document to copy from.
            indices: Zero-based indices, in output order.

        Returns:
            list[PageHandle]: One copied page per index.
        """

    def add_page(self, dest: DocumentHandle, page: PageHandle) -> None:
        """Append a copied page to a document.

        Args:
            dest: Destination document.
            page: Page returned by `copy_pages`.
        """

    def save(self, document: DocumentHandle) -> bytes:
        """Serialize a document.

        Args:
            document: Document to serialize.

        Raises:
            DocumentSaveError: If the backend cannot write the document.

        Returns:
            bytes: Serialized document.
        """


class PageRendererCapability(Protocol):
    """Rendering of pages to a fixed display width."""

    @property
    def render_width(self) -> int:
        """Return the display width pages are rendered at."""

    def page_count(self, data: bytes) -> int:
        """Return the number of pages of a document.

        Args:
            data: Serialized document.

        Returns:
            int: Number of pages.
        """

    def render_page(self, data: bytes, page_index: int) -> RenderedPage:
        """Render one page.

        Args:
            data: Serialized document.
            page_index: Zero-based page index.

        Returns:
            RenderedPage: Rendered image payload.
        """

    def text_layer(self, data: bytes, page_index: int) -> list[TextSpan]:
        """Return the selectable words of a page in display space.

        Args:
            data: Serialized document.
            page_index: Zero-based page index.

        Returns:
            list[TextSpan]: Words with their display-space boxes.
        """
