"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class DocumentLoadError(PackageError):
    """Raised when source bytes cannot be opened as a document."""

    message: str = "Failed to load document"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class DocumentSaveError(PackageError):
    """Raised when a document cannot be serialized back to bytes."""

    message: str = "Failed to save document"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class HighlightDrawError(PackageError):
    """Raised when a highlight rectangle cannot be painted onto a page."""

    message: str = "Failed to draw highlight"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class EmptySelectionError(PackageError):
    """Raised when an extraction is requested without any page."""

    message: str = "No pages selected"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class EmptyAnnotationSetError(PackageError):
    """Raised when a commit is requested without any highlight."""

    message: str = "No highlights to commit"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class PageIndexOutOfRangeError(PackageError):
    """Raised when a page index does not address a page of the document."""

    index: int
    page_count: int | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        if self.page_count is None:
            return f"Page index {self.index} is out of range"
        return f"Page index {self.index} is out of range (document has {self.page_count} pages)"


@dataclass(frozen=True)
class GeometryError(PackageError):
    """Raised when a coordinate transform receives unusable dimensions."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class DuplicateHighlightError(PackageError):
    """Raised when a highlight id is already present in a store."""

    highlight_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Highlight '{self.highlight_id}' already exists"


@dataclass(frozen=True)
class NoActiveDocumentError(PackageError):
    """Raised when a session operation needs a loaded document."""

    message: str = "No document loaded"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class OperationInProgressError(PackageError):
    """Raised when a commit or extraction is started while another one runs."""

    operation: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Cannot start '{self.operation}': another operation is in progress"


@dataclass(frozen=True)
class FileTooLargeError(PackageError):
    """Raised when an input file exceeds the configured size limit."""

    path: str
    size: int
    limit: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"File '{self.path}' is {self.size} bytes, above the {self.limit} bytes limit"
