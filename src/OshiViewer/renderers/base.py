"""Base classes for output writers.

Separates browse control flow from output logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from OshiViewer.search.facets import BrowseFilters
    from OshiViewer.services.browse import BrowseResult


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_browse_result(self, result: BrowseResult, filters: BrowseFilters) -> None:
        """Write the result of one browse request.

        Args:
            result: Matching items, facets and parsed query.
            filters: The filter panel state that produced the result.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'browse').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_browse_result(self, result: BrowseResult, filters: BrowseFilters) -> None:
        for writer in self.writers:
            writer.write_browse_result(result, filters)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
