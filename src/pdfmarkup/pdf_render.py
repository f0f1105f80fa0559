"""Page rendering at a fixed display width."""

from __future__ import annotations

import base64
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

try:
    import fitz
except Exception:  # pragma: no cover - optional dependency at runtime
    fitz: Any
    fitz = None

from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec
from pdfmarkup.exceptions import DependencyError, GeometryError, PageIndexOutOfRangeError
from pdfmarkup.geometry import rendered_height, scale_factor, to_display_space
from pdfmarkup.logging import get_logger
from pdfmarkup.typing.enums import ImageFormat
from pdfmarkup.typing.models import ClientRect, DisplayRect, DocRect, RenderedPage, TextSpan

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pdfmarkup.settings import Settings

logger = get_logger(__name__)


class PageRenderer:
    """Render pages and their text layer in display space.

    Built once at start-up and handed to the components that display pages,
    so capture and commit agree on the width that defines display space.
    """

    def __init__(self, *, render_width: int, image_format: ImageFormat = ImageFormat.PNG) -> None:
        """Initialize renderer.

        Args:
            render_width (int): Pixel width every page is rendered at.
            image_format (ImageFormat): Format of rendered page images.

        Raises:
            DependencyError: If PyMuPDF is not installed.
            GeometryError: If the render width is not positive.
        """
        if fitz is None:
            raise DependencyError(missing_package=["pymupdf"], message="page renderer")
        if render_width <= 0:
            raise GeometryError(message=f"render_width must be positive, got {render_width}")
        self._render_width = render_width
        self._image_format = image_format
        self._codec = PyMuPDFCodec()

    @classmethod
    def from_settings(cls, settings: Settings) -> PageRenderer:
        """Build a renderer from runtime settings.

        Args:
            settings (Settings): Runtime settings.

        Returns:
            PageRenderer: Configured renderer.
        """
        return cls(render_width=settings.render_width, image_format=settings.render_image_format)

    @property
    def render_width(self) -> int:
        """Return the pixel width defining display space."""
        return self._render_width

    @contextmanager
    def _open_page(self, data: bytes, page_index: int) -> Iterator[tuple[Any, int]]:
        """Open a document and yield one of its pages with the page count."""
        handle = self._codec.load(data)
        try:
            page_count = handle.page_count
            if not 0 <= page_index < page_count:
                raise PageIndexOutOfRangeError(index=page_index, page_count=page_count)
            yield handle.document[page_index], page_count
        finally:
            handle.close()

    def page_count(self, data: bytes) -> int:
        """Return the number of pages of a document.

        Args:
            data (bytes): Serialized document.

        Raises:
            DocumentLoadError: If the bytes cannot be opened.

        Returns:
            int: Number of pages.
        """
        handle = self._codec.load(data)
        try:
            return handle.page_count
        finally:
            handle.close()

    def render_page(self, data: bytes, page_index: int) -> RenderedPage:
        """Render one page at the configured width.

        Args:
            data (bytes): Serialized document.
            page_index (int): Zero-based page index.

        Raises:
            DocumentLoadError: If the bytes cannot be opened.
            PageIndexOutOfRangeError: If the page does not exist.

        Returns:
            RenderedPage: Base64 encoded image of the page.
        """
        with self._open_page(data, page_index) as (page, page_count):
            zoom = 1.0 / scale_factor(self._render_width, page.rect.width)
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
            image_bytes = pix.tobytes(output=self._image_format.value)
            rendered = RenderedPage(
                page_index=page_index,
                page_count=page_count,
                width=pix.width,
                height=pix.height,
                mime_type=self._image_format.mime_type,
                data_base64=base64.b64encode(image_bytes).decode("ascii"),
            )

        logger.info("Page rendered", extra={"page_index": page_index, "width": rendered.width})
        return rendered

    def text_layer(self, data: bytes, page_index: int) -> list[TextSpan]:
        """Return the words of a page positioned in display space.

        Args:
            data (bytes): Serialized document.
            page_index (int): Zero-based page index.

        Returns:
            list[TextSpan]: Words in reading order.
        """
        with self._open_page(data, page_index) as (page, _):
            return [
                TextSpan(text=word[4], rect=self._to_display(page, fitz.Rect(word[:4])))
                for word in page.get_text("words", sort=True)
            ]

    def find_text(self, data: bytes, page_index: int, needle: str) -> list[ClientRect]:
        """Locate text on a page, one rectangle per matched line segment.

        The rectangles are page-relative display coordinates, i.e. what a
        text selection over the matches reports when the page container sits
        at the viewport origin.

        Args:
            data (bytes): Serialized document.
            page_index (int): Zero-based page index.
            needle (str): Text to search for (case-insensitive).

        Returns:
            list[ClientRect]: Rectangles covering every match.
        """
        with self._open_page(data, page_index) as (page, _):
            hits = page.search_for(needle)
            rects = [ClientRect(**self._to_display(page, hit).model_dump()) for hit in hits]

        logger.debug("Text searched", extra={"page_index": page_index, "matches": len(rects)})
        return rects

    def page_container(self, data: bytes, page_index: int) -> ClientRect:
        """Return the bounds of a rendered page placed at the viewport origin."""
        with self._open_page(data, page_index) as (page, _):
            height = rendered_height(self._render_width, page.rect.width, page.rect.height)
            return ClientRect(top=0.0, left=0.0, width=self._render_width, height=height)

    def _to_display(self, page: Any, rect: Any) -> DisplayRect:
        """Map a PyMuPDF (top-left anchored) rectangle to display space."""
        page_rect = page.rect
        doc_rect = DocRect(
            x=rect.x0 - page_rect.x0,
            y=page_rect.y1 - rect.y1,
            width=rect.width,
            height=rect.height,
        )
        return to_display_space(doc_rect, self._render_width, page_rect.width, page_rect.height)
