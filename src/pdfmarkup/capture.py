"""Turn a completed text selection into a highlight record."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmarkup import logger
from pdfmarkup.typing.models import DisplayRect, Highlight

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmarkup.typing.models import ClientRect


def to_container_relative(rect: ClientRect, container_rect: ClientRect) -> DisplayRect:
    """Express a viewport rectangle relative to the page container.

    Args:
        rect (ClientRect): Selection rectangle in viewport coordinates.
        container_rect (ClientRect): Page container bounds in viewport coordinates.

    Returns:
        DisplayRect: Page-relative rectangle with unchanged size.
    """
    return DisplayRect(
        top=rect.top - container_rect.top,
        left=rect.left - container_rect.left,
        width=rect.width,
        height=rect.height,
    )


def capture_selection(
    selection_rects: Sequence[ClientRect],
    container_rect: ClientRect,
    active_page_index: int,
    *,
    text: str | None = None,
) -> Highlight | None:
    """Build a highlight from the rectangles covering a text selection.

    The selection is ignored when it is empty, collapsed (no rectangle covers
    any area) or when one of its rectangles is not fully inside the page
    container. Zero-area rectangles reported alongside real ones are dropped.

    Args:
        selection_rects (Sequence[ClientRect]): Bounding rectangles of the selection.
        container_rect (ClientRect): Bounds of the rendered page container.
        active_page_index (int): Zero-based index of the displayed page.
        text (str | None): Selected text, kept for display and logging.

    Returns:
        Highlight | None: New highlight, or None when nothing qualifies.
    """
    covering = [rect for rect in selection_rects if not rect.is_degenerate]
    if not covering:
        return None

    if any(not container_rect.contains(rect) for rect in covering):
        logger.debug(
            "Selection ignored, outside page container",
            extra={"page_index": active_page_index, "rects": len(covering)},
        )
        return None

    highlight = Highlight(
        page_index=active_page_index,
        rects=tuple(to_container_relative(rect, container_rect) for rect in covering),
        text=text or None,
        rendered_width=container_rect.width or None,
    )
    logger.debug(
        "Selection captured",
        extra={"highlight_id": highlight.id, "page_index": active_page_index, "rects": len(highlight.rects)},
    )
    return highlight
