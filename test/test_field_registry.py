"""Tests for field resolution, value extraction and searchable text."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from OshiViewer.core.models import (
    Appraiser,
    Assessment,
    BladeDetails,
    CatalogItem,
    FittingDetails,
    FittingsMaker,
    ItemMetadata,
    Maker,
    Mei,
    MountingDetails,
    Nakago,
    Origami,
    Provenance,
    SetType,
    Smith,
)
from OshiViewer.search.fields import (
    FIELD_DEFINITIONS,
    REGISTRY,
    FieldDefinition,
    FieldRegistry,
    get_all_field_names,
    get_field_value,
    resolve_field_name,
)


def _blade_item(**meta_kwargs) -> CatalogItem:
    details = meta_kwargs.pop("details", BladeDetails())
    return CatalogItem(
        collection="Juyo",
        volume=6,
        item=12,
        metadata=ItemMetadata(details=details, **meta_kwargs),
    )


class TestFieldResolution(unittest.TestCase):
    def test_resolve_names_and_aliases(self) -> None:
        self.assertEqual(resolve_field_name("nagasa"), "nagasa")
        self.assertEqual(resolve_field_name("CM"), "nagasa")
        self.assertEqual(resolve_field_name("den"), "tradition")
        self.assertEqual(resolve_field_name("session"), "volume")
        self.assertIsNone(resolve_field_name("colour"))

    def test_all_field_names_sorted(self) -> None:
        names = get_all_field_names()
        self.assertEqual(names, sorted(names))
        self.assertIn("kiwame", names)
        self.assertIn("gokaden", names)

    def test_every_field_is_extractable(self) -> None:
        bare = CatalogItem(collection="Tokuju", volume=1, item=1)
        for definition in FIELD_DEFINITIONS:
            with self.subTest(field=definition.name):
                REGISTRY.value_of(bare, definition.name)

    def test_alias_collision_is_rejected(self) -> None:
        definitions = (
            FieldDefinition("alpha", ("shared",), "text", "A"),
            FieldDefinition("beta", ("Shared",), "text", "B"),
        )
        extractors = {"alpha": lambda item: None, "beta": lambda item: None}
        with self.assertRaises(ValueError) as ctx:
            FieldRegistry(definitions, extractors)
        self.assertIn("shared", str(ctx.exception).lower())

    def test_extractor_table_must_match_definitions(self) -> None:
        definitions = (FieldDefinition("alpha", (), "text", "A"),)
        with self.assertRaises(ValueError):
            FieldRegistry(definitions, {})
        with self.assertRaises(ValueError):
            FieldRegistry(definitions, {"alpha": lambda item: None, "beta": lambda item: None})


class TestValueExtraction(unittest.TestCase):
    def test_summary_attribute_wins(self) -> None:
        item = CatalogItem(
            collection="Juyo",
            volume=6,
            item=12,
            smith_name_romaji="Kuniyuki",
            nagasa=72.5,
            metadata=ItemMetadata(details=BladeDetails(smith=Smith(name_romaji="Other"))),
        )
        self.assertEqual(get_field_value(item, "smith"), "Kuniyuki")
        self.assertEqual(get_field_value(item, "cm"), 72.5)
        self.assertEqual(get_field_value(item, "volume"), 6)
        self.assertEqual(get_field_value(item, "collection"), "Juyo")

    def test_blade_metadata_fallback(self) -> None:
        item = _blade_item(
            details=BladeDetails(
                blade_type="tachi",
                smith=Smith(name_romaji="Masamune", school="Masamune", tradition="Soshu"),
                nakago=Nakago(condition="ubu", yasurime=("katte-sagari",), mekugi_ana=2),
            ),
            mei=Mei(status="mumei"),
        )
        self.assertEqual(get_field_value(item, "smith"), "Masamune")
        self.assertEqual(get_field_value(item, "tradition"), "Soshu")
        self.assertEqual(get_field_value(item, "type"), "tachi")
        self.assertEqual(get_field_value(item, "nakago"), "ubu")
        self.assertEqual(get_field_value(item, "mekugi"), 2)
        self.assertEqual(get_field_value(item, "yasurime"), ["katte-sagari"])
        self.assertEqual(get_field_value(item, "mei"), "mumei")
        self.assertEqual(get_field_value(item, "item_type"), "token")
        self.assertIs(get_field_value(item, "horimono"), False)

    def test_missing_values_are_none(self) -> None:
        item = _blade_item()
        self.assertIsNone(get_field_value(item, "sori"))
        self.assertIsNone(get_field_value(item, "yasurime"))
        self.assertIsNone(get_field_value(item, "denrai"))
        self.assertIsNone(get_field_value(item, "kiwame"))
        self.assertIsNone(get_field_value(item, "unknown"))
        self.assertIsNone(get_field_value(CatalogItem("Juyo", 1, 1), "ensemble"))

    def test_fitting_fields(self) -> None:
        item = _blade_item(
            details=FittingDetails(
                fitting_type="tsuba",
                maker=Maker(name_romaji="Nobuie", school="Owari"),
                piece_count=3,
            )
        )
        self.assertEqual(get_field_value(item, "maker"), "Nobuie")
        self.assertEqual(get_field_value(item, "school"), "Owari")
        self.assertEqual(get_field_value(item, "type"), "tsuba")
        self.assertIs(get_field_value(item, "ensemble"), True)
        self.assertIsNone(get_field_value(item, "nagasa"))

        single = _blade_item(details=FittingDetails(fitting_type="tsuba", piece_count=1))
        self.assertIs(get_field_value(single, "ensemble"), False)
        paired = _blade_item(details=FittingDetails(set_type=SetType(type="daisho")))
        self.assertIs(get_field_value(paired, "set"), True)

    def test_mounting_fields(self) -> None:
        item = _blade_item(
            details=MountingDetails(
                mounting_type="handachi",
                fittings_maker=FittingsMaker(primary_artisan="Goto Ichijo", unified_set=True),
            )
        )
        self.assertEqual(get_field_value(item, "smith"), "Goto Ichijo")
        self.assertEqual(get_field_value(item, "type"), "handachi")
        self.assertIs(get_field_value(item, "ensemble"), True)
        self.assertIs(get_field_value(_blade_item(), "ensemble"), False)

    def test_kiwame_falls_back_to_origami(self) -> None:
        with_mei = _blade_item(
            mei=Mei(status="mumei", appraiser=Appraiser(name="Honami Kochu")),
            provenance=Provenance(origami=Origami(present=True, appraiser="Honami Koson")),
        )
        papers_only = _blade_item(provenance=Provenance(origami=Origami(present=True, appraiser="Honami Koson")))
        self.assertEqual(get_field_value(with_mei, "kiwame"), "Honami Kochu")
        self.assertEqual(get_field_value(papers_only, "appraiser"), "Honami Koson")
        self.assertIs(get_field_value(papers_only, "origami"), True)


class TestSearchableText(unittest.TestCase):
    def test_text_is_lower_cased_and_curated(self) -> None:
        item = CatalogItem(
            collection="Juyo",
            volume=6,
            item=12,
            smith_name_romaji="Sadamune",
            school="Soshu",
            metadata=ItemMetadata(
                details=BladeDetails(smith=Smith(name_romaji="Sadamune", lineage="son of Masamune")),
                provenance=Provenance(denrai=("Masamune collection",)),
                assessment=Assessment(praise_tags=("rivals Masamune",)),
            ),
        )
        text = REGISTRY.searchable_text(item)
        self.assertIn("sadamune", text)
        self.assertIn("juyo", text)
        self.assertNotIn("masamune", text)
        self.assertEqual(text, text.lower())


if __name__ == "__main__":
    unittest.main()
