"""Rendered page and produced document models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pdfmarkup.typing.models.geometry import DisplayRect


class RenderedPage(BaseModel):
    """Page rendered to a fixed display width."""

    model_config = ConfigDict(extra="forbid")

    page_index: int = Field(ge=0)
    page_count: int = Field(ge=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    mime_type: str
    data_base64: str


class TextSpan(BaseModel):
    """Word of the selectable text layer, positioned in display space."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str
    rect: DisplayRect


class OutputArtifact(BaseModel):
    """Complete document produced by a pipeline, ready to be written out."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str
    data: bytes
    page_count: int = Field(ge=0)
