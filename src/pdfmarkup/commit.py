"""Bake highlights into document bytes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmarkup import logger
from pdfmarkup.async_runner import run_blocking
from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec
from pdfmarkup.exceptions import EmptyAnnotationSetError
from pdfmarkup.geometry import to_document_space

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmarkup.typing.models import Highlight
    from pdfmarkup.typing.protocol import DocumentCodec, DocumentHandle

HIGHLIGHT_COLOR: tuple[float, float, float] = (1.0, 1.0, 0.0)
HIGHLIGHT_OPACITY = 0.4


def commit_highlights(
    original_bytes: bytes,
    highlights: Sequence[Highlight],
    rendered_width: float,
    *,
    codec: DocumentCodec | None = None,
) -> bytes:
    """Draw every highlight permanently into a copy of the document.

    Each rectangle becomes a translucent yellow fill in the page content
    stream. Highlights addressing a page the document does not have are
    skipped. The page count and order of the document are preserved.

    Args:
        original_bytes (bytes): Source document; never modified.
        highlights (Sequence[Highlight]): Highlights to commit.
        rendered_width (float): Display width used for highlights that did not
            record their own.
        codec (DocumentCodec | None): Document codec, PyMuPDF by default.

    Raises:
        EmptyAnnotationSetError: If there is nothing to commit.
        DocumentLoadError: If the source bytes cannot be opened.
        HighlightDrawError: If a rectangle cannot be painted.
        DocumentSaveError: If the result cannot be serialized.

    Returns:
        bytes: Serialized document carrying the highlights.
    """
    if not highlights:
        raise EmptyAnnotationSetError

    codec = codec or PyMuPDFCodec()
    document = codec.load(original_bytes)
    try:
        page_count = document.page_count
        drawn = sum(_draw_highlight(document, highlight, rendered_width) for highlight in highlights)
        output = codec.save(document)
    finally:
        document.close()

    logger.info(
        "Highlights committed",
        extra={"highlights": len(highlights), "rects": drawn, "pages": page_count},
    )
    return output


def _draw_highlight(document: DocumentHandle, highlight: Highlight, rendered_width: float) -> int:
    """Draw the rectangles of one highlight.

    Args:
        document (DocumentHandle): Open target document.
        highlight (Highlight): Highlight to draw.
        rendered_width (float): Fallback display width.

    Returns:
        int: Number of rectangles drawn.
    """
    if not 0 <= highlight.page_index < document.page_count:
        logger.warning(
            "Highlight skipped, page not in document",
            extra={
                "highlight_id": highlight.id,
                "page_index": highlight.page_index,
                "page_count": document.page_count,
            },
        )
        return 0

    page = document.get_page(highlight.page_index)
    size = page.get_size()
    width = highlight.rendered_width or rendered_width
    for rect in highlight.rects:
        page.draw_rectangle(
            to_document_space(rect, width, size.width, size.height),
            color=HIGHLIGHT_COLOR,
            opacity=HIGHLIGHT_OPACITY,
        )
    return len(highlight.rects)


async def acommit_highlights(
    original_bytes: bytes,
    highlights: Sequence[Highlight],
    rendered_width: float,
    *,
    codec: DocumentCodec | None = None,
) -> bytes:
    """Async variant of `commit_highlights`, run in a worker thread."""
    return await run_blocking(commit_highlights, original_bytes, list(highlights), rendered_width, codec=codec)
