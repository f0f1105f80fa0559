"""Rectangle models for display space and native document space."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DisplayRect(BaseModel):
    """Rectangle in display space (top-left origin, y grows downward)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: float
    left: float
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)

    @property
    def right(self) -> float:
        """Return the right edge."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Return the bottom edge."""
        return self.top + self.height

    @property
    def is_degenerate(self) -> bool:
        """Return whether the rectangle covers no area."""
        return self.width == 0 or self.height == 0

    def contains(self, other: DisplayRect) -> bool:
        """Return whether `other` lies fully inside this rectangle.

        Shared edges count as inside.

        Args:
            other (DisplayRect): Rectangle expressed in the same coordinate system.

        Returns:
            bool: True when no part of `other` sticks out.
        """
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


class ClientRect(DisplayRect):
    """Viewport rectangle as reported by a display surface."""


class DocRect(BaseModel):
    """Rectangle in native document space (bottom-left origin, y grows upward)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float
    y: float
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)


class PageSize(BaseModel):
    """Native size of a document page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
