"""Item matcher.

Evaluates a `ParsedQuery` against catalog items. Every condition must hold
(AND semantics); the first failing condition rejects the item. A missing
value never satisfies a condition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, TypeVar

from OshiViewer.core.models import CatalogItem
from OshiViewer.core.query import Comparison, FieldMatch, ParsedQuery
from OshiViewer.search.fields import FieldRegistry, FieldValue, REGISTRY
from OshiViewer.search.parser import parse_number

ItemT = TypeVar("ItemT", bound=CatalogItem)

EQUALITY_TOLERANCE = 0.01

_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_comparison(value: Optional[FieldValue], comparison: Comparison) -> bool:
    """Check a numeric comparison against an extracted value.

    Equality allows a difference below `EQUALITY_TOLERANCE` to absorb
    rounding in recorded measurements.
    """
    if not _is_number(value):
        return False
    target = comparison.value
    if comparison.operator == ">":
        return value > target
    if comparison.operator == "<":
        return value < target
    if comparison.operator == ">=":
        return value >= target
    if comparison.operator == "<=":
        return value <= target
    if comparison.operator == "=":
        return abs(value - target) < EQUALITY_TOLERANCE
    return False


def _number_text(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def check_field_match(value: Optional[FieldValue], match: FieldMatch) -> bool:
    """Check a field match against an extracted value.

    - boolean: target must be one of true/yes/1 or false/no/0
    - numeric: exact equality (`volume:1` never matches volume 10)
    - array: any element contains the target
    - text: case-insensitive substring
    """
    if value is None:
        return False

    target = match.value.lower()

    if isinstance(value, bool):
        if target in _TRUE_WORDS:
            return value is True
        if target in _FALSE_WORDS:
            return value is False
        return False

    if _is_number(value):
        number = parse_number(target)
        if number is not None:
            return value == number
        return _number_text(value) == target

    if isinstance(value, list):
        return any(target in str(element).lower() for element in value)

    return target in str(value).lower()


def match_item(item: CatalogItem, query: ParsedQuery, *, registry: FieldRegistry = REGISTRY) -> bool:
    """Return True if the item satisfies every condition of the query.

    Args:
        item: Catalog item.
        query: Parsed query. An empty query matches every item.
        registry: Field registry used for extraction.

    Returns:
        Whether the item matches.
    """
    text = registry.searchable_text(item)

    if any(term in text for term in query.negations):
        return False

    for comparison in query.comparisons:
        if not check_comparison(registry.value_of(item, comparison.field), comparison):
            return False

    for field_match in query.field_matches:
        if not check_field_match(registry.value_of(item, field_match.field), field_match):
            return False

    for phrase in query.phrases:
        if phrase.lower() not in text:
            return False

    for term in query.text_terms:
        if term not in text:
            return False

    return True


def filter_items(items: Iterable[ItemT], query: ParsedQuery, *, registry: FieldRegistry = REGISTRY) -> list[ItemT]:
    """Return the items matching the query, in input order."""
    return [item for item in items if match_item(item, query, registry=registry)]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Match outcome for one item.

    Attributes:
        item: The evaluated item.
        matched: Whether it satisfied the query.
        matched_terms: Free-text terms found in the item, only when matched.
    """

    item: CatalogItem
    matched: bool
    matched_terms: Optional[tuple[str, ...]] = None


def filter_items_with_details(
    items: Iterable[CatalogItem],
    query: ParsedQuery,
    *,
    registry: FieldRegistry = REGISTRY,
) -> list[MatchResult]:
    """Evaluate every item and report which free-text terms it matched."""
    results: list[MatchResult] = []
    for item in items:
        if not match_item(item, query, registry=registry):
            results.append(MatchResult(item=item, matched=False))
            continue
        text = registry.searchable_text(item)
        terms = tuple(term for term in query.text_terms if term in text)
        results.append(MatchResult(item=item, matched=True, matched_terms=terms))
    return results
