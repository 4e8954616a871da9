"""CLI package for OshiViewer command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from OshiViewer.cli.runner import CommandRunner
from OshiViewer.cli.ui import cli


def main() -> None:
    """Run OshiViewer CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
