"""Tests for the browse service."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from OshiViewer.core.models import CatalogItem, ItemRef
from OshiViewer.search.facets import BrowseFilters
from OshiViewer.services.browse import BrowseService, CorpusHints


class _StubProvider:
    def __init__(self, items: list[CatalogItem]) -> None:
        self.name = "stub"
        self._items = items
        self.hints: list[CorpusHints] = []

    def list_corpus(self, hints: CorpusHints) -> list[CatalogItem]:
        self.hints.append(hints)
        return list(self._items)


def _items() -> list[CatalogItem]:
    return [
        CatalogItem(collection="Tokuju", volume=1, item=2, school="Rai", era="Kamakura"),
        CatalogItem(collection="Juyo", volume=6, item=3, school="Osafune", era="Kamakura"),
        CatalogItem(collection="Juyo", volume=6, item=1, school="Rai", era="Nanbokucho"),
        CatalogItem(collection="Juyo", volume=2, item=5, school="Rai", era="Kamakura"),
    ]


class TestBrowseService(unittest.TestCase):
    def test_results_sorted_by_identity(self) -> None:
        service = BrowseService(provider=_StubProvider(_items()))
        result = service.browse(BrowseFilters(query="rai"))

        self.assertEqual(result.total, 3)
        self.assertEqual(
            [(i.collection, i.volume, i.item) for i in result.items],
            [("Juyo", 2, 5), ("Juyo", 6, 1), ("Tokuju", 1, 2)],
        )
        self.assertEqual([i.ref for i in result.items], sorted(i.ref for i in result.items))
        self.assertLess(ItemRef("Juyo", 6, 1), ItemRef("Juyo", 6, 12))
        self.assertEqual(result.query.text_terms, ("rai",))

    def test_collection_facet_ignores_collection_filter(self) -> None:
        provider = _StubProvider(_items())
        result = BrowseService(provider=provider).browse(BrowseFilters(collection="Juyo", school="Rai"))

        self.assertEqual(result.total, 2)
        counts = {o.value: o.count for o in result.facets["collections"]}
        self.assertEqual(counts, {"Juyo": 2, "Tokuju": 1})
        self.assertEqual(provider.hints, [CorpusHints()])

    def test_invalid_filters_raise(self) -> None:
        service = BrowseService(provider=_StubProvider(_items()))
        with self.assertRaises(ValueError):
            service.browse(BrowseFilters(collection="Hozon"))
        with self.assertRaises(ValueError):
            service.browse(BrowseFilters(volume=0))

    def test_long_query_is_truncated(self) -> None:
        service = BrowseService(provider=_StubProvider(_items()), max_query_length=10)
        result = service.browse(BrowseFilters(query="kamakura " + "x" * 50))
        self.assertEqual(result.query.original, "kamakura x")
        self.assertEqual(result.query.text_terms, ("kamakura", "x"))

    def test_facet_limit_is_passed_through(self) -> None:
        items = [CatalogItem(collection="Juyo", volume=1, item=i, smith_name_romaji=f"S{i:02d}") for i in range(8)]
        result = BrowseService(provider=_StubProvider(items), facet_limit=3).browse(BrowseFilters())
        self.assertEqual([o.value for o in result.facets["smiths"]], ["S00", "S01", "S02"])
        self.assertEqual(result.total, 8)

    def test_list_volume_requests_summaries(self) -> None:
        provider = _StubProvider(_items())
        items = BrowseService(provider=provider).list_volume("Juyo", 6)

        self.assertEqual([i.item for i in items], [1, 3])
        self.assertEqual(provider.hints, [CorpusHints(collection="Juyo", volume=6, with_metadata=False)])
        with self.assertRaises(ValueError):
            BrowseService(provider=provider).list_volume("Juyo", 0)


if __name__ == "__main__":
    unittest.main()
