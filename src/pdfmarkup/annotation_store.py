"""In-memory highlight collection for one document session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmarkup.exceptions import DuplicateHighlightError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pdfmarkup.typing.models import Highlight


class AnnotationStore:
    """Highlights keyed by id, kept in insertion order."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._highlights: dict[str, Highlight] = {}

    def add(self, highlight: Highlight) -> None:
        """Store a highlight.

        Args:
            highlight (Highlight): Highlight to store.

        Raises:
            DuplicateHighlightError: If a highlight with the same id is stored.
        """
        if highlight.id in self._highlights:
            raise DuplicateHighlightError(highlight_id=highlight.id)
        self._highlights[highlight.id] = highlight

    def remove(self, highlight_id: str) -> None:
        """Drop a highlight; unknown ids are ignored."""
        self._highlights.pop(highlight_id, None)

    def get(self, highlight_id: str) -> Highlight | None:
        """Return the highlight with the given id, if stored."""
        return self._highlights.get(highlight_id)

    def all_for_page(self, page_index: int) -> list[Highlight]:
        """Return the highlights of one page in insertion order.

        Args:
            page_index (int): Zero-based page index.

        Returns:
            list[Highlight]: Highlights on the page.
        """
        return [highlight for highlight in self._highlights.values() if highlight.page_index == page_index]

    def all(self) -> list[Highlight]:
        """Return every highlight in insertion order."""
        return list(self._highlights.values())

    def count(self) -> int:
        """Return the number of stored highlights."""
        return len(self._highlights)

    def clear(self) -> None:
        """Drop every highlight."""
        self._highlights.clear()

    def __len__(self) -> int:
        """Return the number of stored highlights."""
        return len(self._highlights)

    def __iter__(self) -> Iterator[Highlight]:
        """Iterate over a snapshot of the highlights."""
        return iter(list(self._highlights.values()))

    def __contains__(self, highlight_id: object) -> bool:
        """Return whether a highlight id is stored."""
        return highlight_id in self._highlights
