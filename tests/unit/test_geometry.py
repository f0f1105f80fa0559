from __future__ import annotations

import pytest

from pdfmarkup.exceptions import GeometryError
from pdfmarkup.geometry import rendered_height, scale_factor, to_display_space, to_document_space
from pdfmarkup.typing.models import DisplayRect, DocRect


def test_identity_scale_flips_vertical_axis() -> None:
    rect = DisplayRect(top=100, left=50, width=200, height=20)

    doc_rect = to_document_space(rect, rendered_width=800, native_width=800, native_height=1000)

    assert doc_rect == DocRect(x=50, y=1000 - 100 - 20, width=200, height=20)


def test_letter_page_rendered_at_800_pixels() -> None:
    rect = DisplayRect(top=80, left=100, width=400, height=16)

    doc_rect = to_document_space(rect, rendered_width=800, native_width=612, native_height=792)

    scale = 612 / 800
    assert doc_rect.x == pytest.approx(100 * scale)
    assert doc_rect.width == pytest.approx(400 * scale)
    assert doc_rect.height == pytest.approx(16 * scale)
    assert doc_rect.y == pytest.approx(792 - 80 * scale - 16 * scale)


def test_doubling_native_width_doubles_extent() -> None:
    rect = DisplayRect(top=30, left=40, width=60, height=10)

    single = to_document_space(rect, rendered_width=500, native_width=500, native_height=700)
    double = to_document_space(rect, rendered_width=500, native_width=1000, native_height=700)

    assert double.x == pytest.approx(2 * single.x)
    assert double.width == pytest.approx(2 * single.width)
    assert double.height == pytest.approx(2 * single.height)
    assert double.y == pytest.approx(700 - 2 * 30 - 2 * 10)


def test_display_space_is_inverse_of_document_space() -> None:
    rect = DisplayRect(top=12.5, left=7.25, width=33, height=9)

    doc_rect = to_document_space(rect, rendered_width=800, native_width=595, native_height=842)
    back = to_display_space(doc_rect, rendered_width=800, native_width=595, native_height=842)

    assert back.top == pytest.approx(rect.top)
    assert back.left == pytest.approx(rect.left)
    assert back.width == pytest.approx(rect.width)
    assert back.height == pytest.approx(rect.height)


def test_rect_at_top_left_corner_lands_at_top_of_page() -> None:
    rect = DisplayRect(top=0, left=0, width=10, height=10)

    doc_rect = to_document_space(rect, rendered_width=100, native_width=100, native_height=100)

    assert doc_rect.y + doc_rect.height == pytest.approx(100)


@pytest.mark.parametrize("rendered_width", [0, -5])
def test_scale_factor_rejects_non_positive_rendered_width(rendered_width: float) -> None:
    with pytest.raises(GeometryError, match="Rendered width"):
        scale_factor(rendered_width, 612)


def test_scale_factor_rejects_non_positive_native_width() -> None:
    with pytest.raises(GeometryError, match="Native width"):
        scale_factor(800, 0)


def test_rendered_height_keeps_aspect_ratio() -> None:
    assert rendered_height(800, 400, 600) == pytest.approx(1200)
