"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

import click

from OshiViewer.cli.commands import BrowseCommand
from OshiViewer.config import AppConfig
from OshiViewer.renderers import create_output_writer
from OshiViewer.search.facets import BrowseFilters
from OshiViewer.services import create_browse_service
from OshiViewer.services.browse import BrowseResult
from OshiViewer.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, component creation and error handling
    for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_browse(self, action: str, filters: BrowseFilters) -> BrowseResult:
        """Execute the browse command.

        Args:
            action: The CLI command name (e.g., 'browse').
            filters: Query string plus active filters from the command line.

        Returns:
            The browse result.

        Raises:
            click.Abort: When the browse fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            command = BrowseCommand(
                browse_service=create_browse_service(self.config),
                output_writer=create_output_writer(self.config),
                filters=filters,
            )
            result = command.execute()
            command.output_writer.finalize(action)
            return result
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Browse failed: %s", e)
            raise click.Abort from e
