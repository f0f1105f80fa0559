"""Conversions between display space and native document space.

Display space has its origin at the top-left corner of the rendered page with
y growing downward. Native space has its origin at the bottom-left corner of
the page with y growing upward. The page is assumed to be rendered with its
aspect ratio preserved, so a single scale factor applies to both axes.
Rotated pages and non-uniform scaling are not supported.
"""

from __future__ import annotations

from pdfmarkup.exceptions import GeometryError
from pdfmarkup.typing.models import DisplayRect, DocRect


def scale_factor(rendered_width: float, native_width: float) -> float:
    """Return the native units covered by one display unit.

    Args:
        rendered_width (float): Width the page was displayed at.
        native_width (float): Native page width.

    Raises:
        GeometryError: If either width is not strictly positive.

    Returns:
        float: `native_width / rendered_width`.
    """
    if rendered_width <= 0:
        raise GeometryError(message=f"Rendered width must be positive, got {rendered_width}")
    if native_width <= 0:
        raise GeometryError(message=f"Native width must be positive, got {native_width}")
    return native_width / rendered_width


def to_document_space(
    rect: DisplayRect,
    rendered_width: float,
    native_width: float,
    native_height: float,
) -> DocRect:
    """Project a display-space rectangle onto the native page.

    Args:
        rect (DisplayRect): Page-relative rectangle in display units.
        rendered_width (float): Width the page was displayed at.
        native_width (float): Native page width.
        native_height (float): Native page height.

    Returns:
        DocRect: Rectangle anchored at its bottom-left corner in native units.
    """
    scale = scale_factor(rendered_width, native_width)
    width = rect.width * scale
    height = rect.height * scale
    return DocRect(
        x=rect.left * scale,
        y=native_height - (rect.top * scale) - height,
        width=width,
        height=height,
    )


def to_display_space(
    rect: DocRect,
    rendered_width: float,
    native_width: float,
    native_height: float,
) -> DisplayRect:
    """Project a native rectangle onto the rendered page.

    Inverse of `to_document_space` for the same page dimensions.

    Args:
        rect (DocRect): Rectangle in native units.
        rendered_width (float): Width the page is displayed at.
        native_width (float): Native page width.
        native_height (float): Native page height.

    Returns:
        DisplayRect: Page-relative rectangle in display units.
    """
    scale = scale_factor(rendered_width, native_width)
    return DisplayRect(
        top=(native_height - rect.y - rect.height) / scale,
        left=rect.x / scale,
        width=rect.width / scale,
        height=rect.height / scale,
    )


def rendered_height(rendered_width: float, native_width: float, native_height: float) -> float:
    """Return the display height of a page rendered at a given width."""
    return native_height / scale_factor(rendered_width, native_width)
