"""Command implementations for the OshiViewer CLI.

Encapsulates command business logic, separated from CLI parameter handling
and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass

from OshiViewer.renderers import OutputWriter
from OshiViewer.search.facets import BrowseFilters
from OshiViewer.services.browse import BrowseResult, BrowseService
from OshiViewer.utils.log import log


@dataclass(slots=True)
class BrowseCommand:
    """Run one browse request and hand the result to the output writer."""

    browse_service: BrowseService
    output_writer: OutputWriter
    filters: BrowseFilters

    def execute(self) -> BrowseResult:
        """Execute the browse request.

        Returns:
            The browse result that was written.
        """
        active = self.filters.active()
        log.debug("Browse filters: query=%r filters=%s", self.filters.query, active)
        if active:
            log.info("filters=%s", ", ".join(f"{key}={value}" for key, value in active.items()))

        result = self.browse_service.browse(self.filters)
        self.output_writer.write_browse_result(result, self.filters)
        return result
