"""Output domain configuration for browse result rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from OshiViewer.config.common import (
    check_non_empty,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed output configuration. Formats are lower-cased and de-duplicated
        in configured order.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "output", required=False)
    formats: list[str] = []
    for item in expect_str_list(get_optional_value(section, "formats", ["console"]), "output.formats"):
        name = item.strip().lower()
        if name and name not in formats:
            formats.append(name)

    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", "output"), "output.base_dir"),
        formats=tuple(formats),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If no format or an unknown format is configured.
    """
    check_non_empty(config.base_dir, "output.base_dir")
    if not config.formats:
        raise ValueError("output.formats must include at least one format")

    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
