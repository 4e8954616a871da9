"""Tests for archive record mapping and the JSON corpus provider."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from OshiViewer.core.mapping import item_from_dict, metadata_from_dict
from OshiViewer.core.models import ItemRef
from OshiViewer.search.facets import BrowseFilters, compute_facets
from OshiViewer.search.fields import get_field_value
from OshiViewer.search.parser import parse_query
from OshiViewer.services.browse import CorpusHints
from OshiViewer.sources.json_corpus import JsonCorpusProvider, parse_corpus_records

FIXTURE = REPO_ROOT / "test" / "fixtures" / "catalog.json"


class TestItemMapping(unittest.TestCase):
    def test_camel_case_summary_and_blade_metadata(self) -> None:
        record = json.loads(FIXTURE.read_text(encoding="utf-8"))["items"][0]
        item = item_from_dict(record)

        self.assertEqual((item.collection, item.volume, item.item), ("Juyo", 6, 12))
        self.assertEqual(item.smith_name_kanji, "国行")
        self.assertEqual(item.nakago_condition, "ubu")
        self.assertTrue(item.has_translation)
        self.assertEqual(item.nagasa, 72.5)

        meta = item.metadata
        self.assertIsNotNone(meta)
        self.assertEqual(meta.item_type, "token")
        self.assertEqual(meta.details.measurements.sori, 2.4)
        self.assertEqual(meta.details.hamon.primary_pattern, ("suguha", "ko-choji"))
        self.assertEqual(meta.era.western_year, 1280)
        self.assertEqual(get_field_value(item, "kiwame"), "Honami Kochu")
        self.assertEqual(get_field_value(item, "year"), 1280)

    def test_snake_case_summary_without_metadata(self) -> None:
        item = item_from_dict(
            {"collection": "Juyo", "volume": "6", "item": 3.0, "smith_name_romaji": "Nagamitsu", "nagasa": 65}
        )
        self.assertEqual((item.volume, item.item), (6, 3))
        self.assertEqual(item.smith_name_romaji, "Nagamitsu")
        self.assertEqual(item.nagasa, 65.0)
        self.assertIsNone(item.metadata)
        self.assertFalse(item.has_translation)

    def test_fitting_metadata(self) -> None:
        meta = metadata_from_dict(
            {"item_type": "tosogu", "piece_count": 2, "set_type": {"type": "daisho", "unified_theme": True}}
        )
        self.assertEqual(meta.details.kind, "tosogu")
        self.assertEqual(meta.details.set_type.type, "daisho")
        self.assertTrue(meta.details.set_type.unified_theme)

    def test_mounting_metadata(self) -> None:
        meta = metadata_from_dict(
            {"item_type": "koshirae", "mounting_type": "handachi", "fittings_maker": {"unified_set": True}}
        )
        self.assertEqual(meta.details.kind, "koshirae")
        self.assertEqual(meta.details.mounting_type, "handachi")
        self.assertTrue(meta.details.fittings_maker.unified_set)

    def test_missing_kind_defaults_to_blade(self) -> None:
        self.assertEqual(metadata_from_dict({}).details.kind, "token")

    def test_invalid_records(self) -> None:
        with self.assertRaises(ValueError):
            item_from_dict({"collection": "Juyo", "item": 1})
        with self.assertRaises(ValueError):
            item_from_dict({"collection": "Juyo", "volume": True, "item": 1})
        with self.assertRaises(ValueError):
            metadata_from_dict({"item_type": "armor"})


class TestJsonCorpusProvider(unittest.TestCase):
    def test_malformed_records_are_skipped(self) -> None:
        provider = JsonCorpusProvider(path=FIXTURE)
        with self.assertLogs("OshiViewer", level="WARNING") as captured:
            items = provider.list_corpus(CorpusHints())

        self.assertEqual(len(items), 3)
        self.assertEqual(len(captured.records), 2)

    def test_duplicate_identity_is_skipped(self) -> None:
        records = [
            {"collection": "Juyo", "volume": 1, "item": 1, "school": "Rai"},
            {"collection": "Juyo", "volume": 1, "item": 1, "school": "Rai"},
            {"collection": "Juyo", "volume": 1, "item": 2, "school": "Rai"},
        ]
        with self.assertLogs("OshiViewer", level="WARNING") as captured:
            items = parse_corpus_records(records)

        self.assertEqual([item.ref for item in items], [ItemRef("Juyo", 1, 1), ItemRef("Juyo", 1, 2)])
        self.assertEqual(len(captured.records), 1)
        self.assertIn("duplicate identity", captured.output[0])

        facets = compute_facets(items, BrowseFilters(), parse_query(""))
        self.assertEqual([(option.value, option.count) for option in facets["schools"]], [("Rai", 2)])

    def test_first_record_wins_on_duplicate_identity(self) -> None:
        with self.assertLogs("OshiViewer", level="WARNING"):
            (item,) = parse_corpus_records(
                [
                    {"collection": "Tokuju", "volume": 2, "item": 5, "school": "Soshu"},
                    {"collection": "Tokuju", "volume": "2", "item": 5.0, "school": "Bizen"},
                ]
            )
        self.assertEqual(item.school, "Soshu")

    def test_hints_narrow_corpus(self) -> None:
        provider = JsonCorpusProvider(path=FIXTURE)
        juyo = provider.list_corpus(CorpusHints(collection="Juyo"))
        self.assertEqual(sorted(item.item for item in juyo), [3, 12])

        tokuju_1 = provider.list_corpus(CorpusHints(collection="Tokuju", volume=1))
        self.assertEqual([item.item for item in tokuju_1], [4])

        summaries = provider.list_corpus(CorpusHints(volume=6, with_metadata=False))
        self.assertTrue(all(item.metadata is None for item in summaries))

    def test_plain_list_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.json"
            path.write_text(json.dumps([{"collection": "Juyo", "volume": 1, "item": 1}]), encoding="utf-8")
            items = JsonCorpusProvider(path=path).list_corpus(CorpusHints())
        self.assertEqual(len(items), 1)

    def test_unreadable_documents_raise(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            with self.assertRaises(RuntimeError):
                JsonCorpusProvider(path=missing).list_corpus(CorpusHints())

            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                JsonCorpusProvider(path=broken).list_corpus(CorpusHints())

            wrong_shape = Path(tmp) / "shape.json"
            wrong_shape.write_text('{"records": []}', encoding="utf-8")
            with self.assertRaises(RuntimeError):
                JsonCorpusProvider(path=wrong_shape).list_corpus(CorpusHints())


if __name__ == "__main__":
    unittest.main()
