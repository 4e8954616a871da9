"""Public configuration API for OshiViewer."""

from __future__ import annotations

from OshiViewer.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from OshiViewer.config.browse import BrowseConfig
from OshiViewer.config.corpus import CorpusConfig
from OshiViewer.config.output import OutputConfig
from OshiViewer.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "CorpusConfig",
    "BrowseConfig",
    "OutputConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
