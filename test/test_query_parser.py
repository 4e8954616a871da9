"""Tests for query parsing and diagnostics."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from OshiViewer.core.query import Comparison, FieldMatch
from OshiViewer.search.parser import (
    is_empty_query,
    parse_number,
    parse_query,
    summarize_query,
    validate_query,
)


class TestParseQuery(unittest.TestCase):
    def test_mixed_query(self) -> None:
        parsed = parse_query("Soshu nagasa>70 mei:Kinzogan -wakizashi")

        self.assertEqual(parsed.text_terms, ("soshu",))
        self.assertEqual(
            parsed.comparisons,
            (Comparison(field="nagasa", operator=">", value=70.0, raw="nagasa>70"),),
        )
        self.assertEqual(parsed.field_matches, (FieldMatch(field="mei", value="kinzogan", raw="mei:Kinzogan"),))
        self.assertEqual(parsed.negations, ("wakizashi",))
        self.assertEqual(parsed.original, "Soshu nagasa>70 mei:Kinzogan -wakizashi")
        self.assertEqual(parsed.diagnostics, ())

    def test_single_comparison(self) -> None:
        (comparison,) = parse_query("nagasa>70").comparisons
        self.assertEqual((comparison.field, comparison.operator, comparison.value), ("nagasa", ">", 70))

    def test_all_operators(self) -> None:
        parsed = parse_query("sori>=1.5 motohaba<=3 kasane<0.7 mekugi=2")
        self.assertEqual([c.operator for c in parsed.comparisons], [">=", "<=", "<", "="])
        self.assertEqual(parsed.comparisons[0].value, 1.5)

    def test_alias_resolves_to_canonical_field(self) -> None:
        self.assertEqual(parse_query("cm>70").comparisons[0].field, parse_query("nagasa>70").comparisons[0].field)
        self.assertEqual(parse_query("Signature:gaku").field_matches[0].field, "mei")

    def test_bang_negation_and_phrase(self) -> None:
        parsed = parse_query('!Tanto "Ko-Itame hada"')
        self.assertEqual(parsed.negations, ("tanto",))
        self.assertEqual(parsed.phrases, ("Ko-Itame hada",))

    def test_shortcut_expansion(self) -> None:
        parsed = parse_query("zai")
        self.assertEqual(parsed.field_matches, (FieldMatch(field="mei", value="signed", raw="mei:signed"),))
        self.assertEqual(parsed.text_terms, ())

        toggled_off = parse_query("ubu=0")
        self.assertEqual(toggled_off.negations, ("ubu",))
        self.assertEqual(toggled_off.field_matches, ())

        self.assertEqual(parse_query("session=6").field_matches[0], FieldMatch("volume", "6", raw="volume:6"))

    def test_unknown_field_demotes_to_text(self) -> None:
        parsed = parse_query("foo:bar colour>3")
        self.assertEqual(parsed.text_terms, ("foo:bar", "colour>3"))
        self.assertEqual([d.code for d in parsed.diagnostics], ["unknown_field", "unknown_field"])
        self.assertEqual({d.severity for d in parsed.diagnostics}, {"info"})

    def test_comparison_on_text_field_keeps_operator_literal(self) -> None:
        parsed = parse_query("school>5")
        self.assertEqual(parsed.comparisons, ())
        self.assertEqual(parsed.field_matches, (FieldMatch(field="school", value=">5", raw="school>5"),))
        (diagnostic,) = parsed.diagnostics
        self.assertEqual((diagnostic.severity, diagnostic.code), ("warning", "type_mismatch"))

    def test_malformed_number_demotes_to_text(self) -> None:
        parsed = parse_query("nagasa>7o nagasa>1.2.3")
        self.assertEqual(parsed.comparisons, ())
        self.assertEqual(parsed.text_terms, ("nagasa>7o", "nagasa>1.2.3"))
        self.assertEqual([d.severity for d in parsed.diagnostics], ["error", "error"])
        self.assertEqual(len(parsed.errors), 2)

    def test_number_with_unit_suffix_is_free_text(self) -> None:
        parsed = parse_query("nagasa>70cm")
        self.assertEqual(parsed.comparisons, ())
        self.assertEqual(parsed.text_terms, ("nagasa>70cm",))
        self.assertEqual(parsed.diagnostics[0].code, "invalid_number")
        self.assertIsNone(parse_number("70cm"))

    def test_never_raises_on_odd_input(self) -> None:
        for query in ("-", "!", ":", "nagasa>", ">70", '"', "''", "a:b:c", "\\"):
            with self.subTest(query=query):
                parse_query(query)


class TestEmptyQuery(unittest.TestCase):
    def test_empty_iff_no_tokens(self) -> None:
        self.assertTrue(is_empty_query(parse_query("")))
        self.assertTrue(is_empty_query(parse_query("   \t")))
        self.assertFalse(is_empty_query(parse_query("-")))
        self.assertFalse(is_empty_query(parse_query("Rai")))

    def test_empty_phrase_is_a_token(self) -> None:
        parsed = parse_query('""')
        self.assertEqual(parsed.phrases, ("",))
        self.assertFalse(is_empty_query(parsed))


class TestHelpers(unittest.TestCase):
    def test_parse_number(self) -> None:
        self.assertEqual(parse_number("70"), 70.0)
        self.assertEqual(parse_number("-1.5"), -1.5)
        self.assertEqual(parse_number(".5"), 0.5)
        self.assertIsNone(parse_number("7o"))
        self.assertIsNone(parse_number("1e3"))
        self.assertIsNone(parse_number(""))

    def test_summarize(self) -> None:
        summary = summarize_query(parse_query('Rai nagasa>70 -tanto "suguha"'))
        self.assertEqual(summary, 'text: rai | comparisons: nagasa>70 | exclude: tanto | phrases: "suguha"')
        self.assertEqual(summarize_query(parse_query("")), "(empty query)")

    def test_validate(self) -> None:
        self.assertEqual(validate_query(parse_query("nagasa>70")), (True, []))
        valid, issues = validate_query(parse_query("nagasa>abc"))
        self.assertFalse(valid)
        self.assertEqual(issues, ["Invalid number: abc"])


if __name__ == "__main__":
    unittest.main()
