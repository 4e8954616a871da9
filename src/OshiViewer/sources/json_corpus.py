"""JSON file corpus source.

Reads catalog records from a JSON document, either a list of records or an
object with an `items` list, and maps them into `CatalogItem` objects.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from OshiViewer.core.mapping import item_from_dict
from OshiViewer.core.models import CatalogItem, ItemRef
from OshiViewer.services.browse import CorpusHints, CorpusProvider
from OshiViewer.utils.log import log


@dataclass(slots=True)
class JsonCorpusProvider(CorpusProvider):
    """`CorpusProvider` backed by a JSON file.

    The file is read once, on first use. Malformed records are skipped with a
    warning; an unreadable or malformed document raises.
    """

    path: Path
    name: str = "json"
    _items: list[CatalogItem] | None = field(default=None, init=False, repr=False)

    def list_corpus(self, hints: CorpusHints) -> list[CatalogItem]:
        """Return items narrowed by collection and volume hints."""
        items = self._load()
        if hints.collection is not None:
            items = [item for item in items if item.collection == hints.collection]
        if hints.volume is not None:
            items = [item for item in items if item.volume == hints.volume]
        if not hints.with_metadata:
            items = [replace(item, metadata=None) for item in items]
        return items

    def _load(self) -> list[CatalogItem]:
        if self._items is not None:
            return self._items

        try:
            payload = json.loads(Path(self.path).read_text(encoding="utf-8"))
        except OSError as error:
            raise RuntimeError(f"Cannot read corpus file {self.path}: {error}") from error
        except json.JSONDecodeError as error:
            raise RuntimeError(f"Corpus file {self.path} is not valid JSON: {error}") from error

        self._items = parse_corpus_records(_record_list(payload, self.path))
        log.info("Corpus file loaded: path=%s items=%d", self.path, len(self._items))
        return self._items


def parse_corpus_records(records: list[Any]) -> list[CatalogItem]:
    """Map raw records into items, skipping malformed and duplicate ones.

    The (collection, volume, item) triple identifies an item; the first
    record carrying a triple wins.
    """
    items: list[CatalogItem] = []
    seen: set[ItemRef] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            log.warning("Skipping corpus record #%d: not an object", index)
            continue
        try:
            item = item_from_dict(record)
        except ValueError as error:
            log.warning("Skipping corpus record #%d: %s", index, error)
            continue
        if item.ref in seen:
            log.warning("Skipping corpus record #%d: duplicate identity %s", index, item.ref)
            continue
        seen.add(item.ref)
        items.append(item)
    return items


def _record_list(payload: Any, path: Path) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and isinstance(payload.get("items"), list):
        return payload["items"]
    raise RuntimeError(f"Corpus file {path} must hold a list or an object with an 'items' list")
