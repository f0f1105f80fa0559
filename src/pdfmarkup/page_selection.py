"""Set of page indices picked for extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmarkup.exceptions import PageIndexOutOfRangeError

if TYPE_CHECKING:
    from collections.abc import Iterable


class PageSelection:
    """Zero-based page indices, always exported in ascending order."""

    def __init__(self, indices: Iterable[int] = ()) -> None:
        """Initialize the selection.

        Args:
            indices (Iterable[int]): Initially selected page indices.
        """
        self._indices: set[int] = set()
        for index in indices:
            self.add(index)

    @staticmethod
    def _check(index: int) -> None:
        """Reject negative page indices."""
        if index < 0:
            raise PageIndexOutOfRangeError(index=index)

    def contains(self, index: int) -> bool:
        """Return whether a page index is selected."""
        return index in self._indices

    def add(self, index: int) -> None:
        """Add a page index.

        Args:
            index (int): Zero-based page index.

        Raises:
            PageIndexOutOfRangeError: If the index is negative.
        """
        self._check(index)
        self._indices.add(index)

    def remove(self, index: int) -> None:
        """Unselect a page index; absent indices are ignored."""
        self._indices.discard(index)

    def toggle(self, index: int) -> bool:
        """Add the index when absent, remove it when present.

        Args:
            index (int): Zero-based page index.

        Returns:
            bool: Whether the index is selected after the call.
        """
        if index in self._indices:
            self._indices.remove(index)
            return False
        self.add(index)
        return True

    def snapshot(self) -> tuple[int, ...]:
        """Return the selected indices in ascending order."""
        return tuple(sorted(self._indices))

    def clear(self) -> None:
        """Unselect every page."""
        self._indices.clear()

    def __len__(self) -> int:
        """Return the number of selected pages."""
        return len(self._indices)

    def __contains__(self, index: object) -> bool:
        """Return whether a page index is selected."""
        return index in self._indices
