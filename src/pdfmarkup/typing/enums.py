"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value.lower())
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc


class ImageFormat(_EnumMixin):
    """Image formats the page renderer can produce."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        """Return the MIME type for the format."""
        return f"image/{self.value}"


class OutputKind(_EnumMixin):
    """Kind of document produced by a pipeline."""

    HIGHLIGHTED = "highlighted"
    EXTRACTED = "extracted"

    def filename_for(self, original_name: str) -> str:
        """Derive the download filename for a produced document.

        Args:
            original_name: Name of the source document.

        Returns:
            str: `<kind>-<original_name>`.
        """
        return f"{self.value}-{original_name}"
