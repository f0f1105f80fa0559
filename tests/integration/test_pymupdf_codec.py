from __future__ import annotations

import pytest

from pdfmarkup.backends.pymupdf_codec import PyMuPDFCodec
from pdfmarkup.exceptions import DocumentLoadError, DocumentSaveError, HighlightDrawError, PageIndexOutOfRangeError
from pdfmarkup.typing.models import DocRect

fitz = pytest.importorskip("fitz")


def test_load_reports_pages_and_sizes(make_pdf) -> None:
    codec = PyMuPDFCodec()
    document = codec.load(make_pdf(2, sizes=[(200, 300), (612, 792)]))
    try:
        assert document.page_count == 2
        size = document.get_page(1).get_size()
        assert (size.width, size.height) == (612, 792)
    finally:
        document.close()


@pytest.mark.parametrize("data", [b"", b"not a pdf at all"])
def test_load_rejects_malformed_bytes(data: bytes) -> None:
    with pytest.raises(DocumentLoadError):
        PyMuPDFCodec().load(data)


def test_load_rejects_encrypted_document() -> None:
    source = fitz.open()
    source.new_page()
    data = source.tobytes(encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user")
    source.close()

    with pytest.raises(DocumentLoadError, match="encrypted"):
        PyMuPDFCodec().load(data)


def test_get_page_out_of_range(make_pdf) -> None:
    document = PyMuPDFCodec().load(make_pdf(1))
    try:
        with pytest.raises(PageIndexOutOfRangeError):
            document.get_page(1)
    finally:
        document.close()


def test_draw_rectangle_flips_to_top_left_coordinates(make_pdf) -> None:
    codec = PyMuPDFCodec()
    document = codec.load(make_pdf(1, sizes=[(200, 300)]))
    try:
        document.get_page(0).draw_rectangle(
            DocRect(x=10, y=250, width=50, height=20),
            color=(1.0, 1.0, 0.0),
            opacity=0.4,
        )
        output = codec.save(document)
    finally:
        document.close()

    with fitz.open(stream=output, filetype="pdf") as result:
        drawings = result[0].get_drawings()

    assert len(drawings) == 1
    rect = drawings[0]["rect"]
    assert (rect.x0, rect.y0, rect.x1, rect.y1) == pytest.approx((10, 30, 60, 50), abs=0.01)
    assert drawings[0]["fill"] == pytest.approx((1.0, 1.0, 0.0))
    assert drawings[0]["fill_opacity"] == pytest.approx(0.4)


def test_save_failure_is_wrapped(make_pdf, mocker) -> None:
    codec = PyMuPDFCodec()
    document = codec.load(make_pdf(1))
    mocker.patch.object(fitz.Document, "tobytes", side_effect=RuntimeError("cannot write"))
    try:
        with pytest.raises(DocumentSaveError, match="cannot write") as exc_info:
            codec.save(document)
    finally:
        document.close()

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_draw_failure_is_wrapped(make_pdf, mocker) -> None:
    document = PyMuPDFCodec().load(make_pdf(1))
    mocker.patch.object(fitz.Page, "draw_rect", side_effect=RuntimeError("bad rect"))
    try:
        with pytest.raises(HighlightDrawError, match="bad rect"):
            document.get_page(0).draw_rectangle(
                DocRect(x=10, y=10, width=5, height=5),
                color=(1.0, 1.0, 0.0),
                opacity=0.4,
            )
    finally:
        document.close()


def test_foreign_handles_are_rejected(fake_codec) -> None:
    with pytest.raises(TypeError, match="Expected a PyMuPDF document handle"):
        PyMuPDFCodec().save(fake_codec.create())
