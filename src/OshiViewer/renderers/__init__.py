"""Output renderers for command results.

Provides the OutputWriter abstraction, console and JSON implementations, and
a factory that instantiates writers from configuration.
"""

from __future__ import annotations

from OshiViewer.config import AppConfig
from OshiViewer.renderers.base import MultiOutputWriter, OutputWriter
from OshiViewer.renderers.console import ConsoleOutputWriter, render_facets, render_text
from OshiViewer.renderers.json import JsonFileWriter, render_browse_payload, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        A MultiOutputWriter over every configured format.

    Raises:
        ValueError: If no writer is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter(max_results=config.browse.max_results))
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_browse_payload",
    "render_facets",
    "render_json",
    "render_text",
    "create_output_writer",
]
