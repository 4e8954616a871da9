"""Application config orchestration and YAML loading entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from OshiViewer.config.browse import BrowseConfig, check_browse, load_browse
from OshiViewer.config.corpus import CorpusConfig, check_corpus, load_corpus
from OshiViewer.config.output import OutputConfig, check_output, load_output
from OshiViewer.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    corpus: CorpusConfig
    browse: BrowseConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    corpus = load_corpus(raw)
    browse = load_browse(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_corpus(corpus)
    check_browse(browse)
    check_output(output)

    return AppConfig(runtime=runtime, corpus=corpus, browse=browse, output=output)


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override.

    Args:
        config_path: User config file. Passing the default path itself loads
            the defaults alone.
        default_path: Base YAML file every run starts from.

    Raises:
        OSError: If a file cannot be read.
        ValueError: If YAML root is not a mapping or a value is invalid.
        TypeError: If a value has the wrong type.
    """
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; override wins on scalars and lists."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
