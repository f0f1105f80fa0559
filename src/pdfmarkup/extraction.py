"""Build a new document out of selected pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmarkup import logger
from pdfmarkup.async_runner import run_blocking
from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec
from pdfmarkup.exceptions import EmptySelectionError, PageIndexOutOfRangeError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmarkup.typing.protocol import DocumentCodec


def extract_pages(
    original_bytes: bytes,
    page_indices: Sequence[int],
    *,
    codec: DocumentCodec | None = None,
) -> bytes:
    """Copy pages of a document into a new, independent document.

    Pages appear in the order of `page_indices`; repeated indices produce
    repeated pages.

    Args:
        original_bytes (bytes): Source document; never modified.
        page_indices (Sequence[int]): Zero-based page indices, in output order.
        codec (DocumentCodec | None): Document codec, PyMuPDF by default.

    Raises:
        EmptySelectionError: If no page is requested.
        DocumentLoadError: If the source bytes cannot be opened.
        PageIndexOutOfRangeError: If an index does not address a source page.
        DocumentSaveError: If the result cannot be serialized.

    Returns:
        bytes: Serialized document holding the copied pages.
    """
    if not page_indices:
        raise EmptySelectionError

    codec = codec or PyMuPDFCodec()
    source = codec.load(original_bytes)
    try:
        page_count = source.page_count
        for index in page_indices:
            if not 0 <= index < page_count:
                raise PageIndexOutOfRangeError(index=index, page_count=page_count)

        target = codec.create()
        try:
            for page in codec.copy_pages(source, list(page_indices)):
                codec.add_page(target, page)
            output = codec.save(target)
        finally:
            target.close()
    finally:
        source.close()

    logger.info(
        "Pages extracted",
        extra={"source_pages": page_count, "extracted_pages": len(page_indices)},
    )
    return output


async def aextract_pages(
    original_bytes: bytes,
    page_indices: Sequence[int],
    *,
    codec: DocumentCodec | None = None,
) -> bytes:
    """Async variant of `extract_pages`, run in a worker thread."""
    return await run_blocking(extract_pages, original_bytes, list(page_indices), codec=codec)
