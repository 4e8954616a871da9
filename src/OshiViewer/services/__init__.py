"""Service layer for OshiViewer.

Provides the browse service over a corpus provider and a factory that
builds it from configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from OshiViewer.services.browse import BrowseResult, BrowseService, CorpusHints, CorpusProvider

if TYPE_CHECKING:
    from OshiViewer.config import AppConfig


def create_browse_service(config: AppConfig, provider: CorpusProvider | None = None) -> BrowseService:
    """Create a browse service for the configured corpus.

    Args:
        config: Application configuration containing corpus and browse settings.
        provider: Optional provider overriding the configured JSON corpus.

    Returns:
        Configured BrowseService instance.
    """
    if provider is None:
        from OshiViewer.sources.json_corpus import JsonCorpusProvider

        provider = JsonCorpusProvider(path=Path(config.corpus.path))

    return BrowseService(
        provider=provider,
        max_query_length=config.browse.max_query_length,
        facet_limit=config.browse.facet_limit,
    )


__all__ = [
    "BrowseResult",
    "BrowseService",
    "CorpusHints",
    "CorpusProvider",
    "create_browse_service",
]
