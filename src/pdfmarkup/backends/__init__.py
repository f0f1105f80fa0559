"""Document engine backends."""

from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec, PyMuPDFDocument, PyMuPDFPage

__all__ = [
    "PyMuPDFCodec",
    "PyMuPDFDocument",
    "PyMuPDFPage",
]
