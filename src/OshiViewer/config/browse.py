"""Browse domain configuration (query limits and facet sizing)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from OshiViewer.config.common import (
    expect_int,
    expect_optional_int,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class BrowseConfig:
    """Store validated browse settings.

    Attributes:
        max_query_length: Query strings are truncated to this many characters.
        facet_limit: Options kept for the smith and denrai facets.
        max_results: Items shown per browse run, None for all.
    """

    max_query_length: int
    facet_limit: int
    max_results: int | None


def load_browse(raw: Mapping[str, Any]) -> BrowseConfig:
    """Load browse domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed browse configuration.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "browse", required=False)
    return BrowseConfig(
        max_query_length=expect_int(
            get_optional_value(section, "max_query_length", 500),
            "browse.max_query_length",
        ),
        facet_limit=expect_int(get_optional_value(section, "facet_limit", 50), "browse.facet_limit"),
        max_results=expect_optional_int(get_optional_value(section, "max_results", None), "browse.max_results"),
    )


def check_browse(config: BrowseConfig) -> None:
    """Validate browse domain constraints.

    Raises:
        ValueError: If a limit is not positive.
    """
    if config.max_query_length <= 0:
        raise ValueError("browse.max_query_length must be positive")
    if config.facet_limit <= 0:
        raise ValueError("browse.facet_limit must be positive")
    if config.max_results is not None and config.max_results <= 0:
        raise ValueError("browse.max_results must be positive or null")
