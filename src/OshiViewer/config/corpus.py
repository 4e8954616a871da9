"""Corpus domain configuration (where the catalog records live)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from OshiViewer.config.common import (
    check_non_empty,
    expect_str,
    get_optional_value,
    get_section,
)

DEFAULT_PATH_ENV = "OSHI_CORPUS_PATH"


@dataclass(frozen=True, slots=True)
class CorpusConfig:
    """Corpus location.

    `path` is already resolved against the environment variable named by
    `path_env` when that variable is set and non-empty.
    """

    path: str
    path_env: str


def load_corpus(raw: Mapping[str, Any]) -> CorpusConfig:
    """Load the `corpus` section, applying the environment override.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "corpus", required=False)
    path_env = expect_str(get_optional_value(section, "path_env", DEFAULT_PATH_ENV), "corpus.path_env")
    path = expect_str(get_optional_value(section, "path", ""), "corpus.path")

    override = os.environ.get(path_env, "").strip() if path_env else ""
    return CorpusConfig(path=override or path, path_env=path_env)


def check_corpus(config: CorpusConfig) -> None:
    """Validate corpus domain constraints."""
    check_non_empty(config.path, "corpus.path")
