"""Typing-centric domain modules."""

from pdfmarkup.typing.enums import ImageFormat, OutputKind
from pdfmarkup.typing.models import (
    ClientRect,
    DisplayRect,
    DocRect,
    Highlight,
    OutputArtifact,
    PageSize,
    RenderedPage,
    TextSpan,
)
from pdfmarkup.typing.protocol import DocumentCodec, DocumentHandle, PageHandle, PageRendererCapability

__all__ = [
    "ClientRect",
    "DisplayRect",
    "DocRect",
    "DocumentCodec",
    "DocumentHandle",
    "Highlight",
    "ImageFormat",
    "OutputArtifact",
    "OutputKind",
    "PageHandle",
    "PageRendererCapability",
    "PageSize",
    "RenderedPage",
    "TextSpan",
]
