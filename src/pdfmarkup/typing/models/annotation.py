"""Highlight annotation model."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from pdfmarkup.typing.models.geometry import DisplayRect


def new_highlight_id() -> str:
    """Return a fresh opaque highlight identifier."""
    return uuid4().hex


class Highlight(BaseModel):
    """One user-made mark tied to a page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=new_highlight_id, min_length=1)
    page_index: int = Field(ge=0)
    rects: tuple[DisplayRect, ...] = Field(min_length=1)
    text: str | None = None
    rendered_width: float | None = Field(
        default=None,
        gt=0.0,
        description="Display width the page had when the highlight was captured.",
    )
