"""Core domain model exports."""

from pdfmarkup.typing.models.annotation import Highlight, new_highlight_id
from pdfmarkup.typing.models.document import OutputArtifact, RenderedPage, TextSpan
from pdfmarkup.typing.models.geometry import ClientRect, DisplayRect, DocRect, PageSize

__all__ = [
    "ClientRect",
    "DisplayRect",
    "DocRect",
    "Highlight",
    "OutputArtifact",
    "PageSize",
    "RenderedPage",
    "TextSpan",
    "new_highlight_id",
]
