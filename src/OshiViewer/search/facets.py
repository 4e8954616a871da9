"""Facet engine for the interactive filter panel.

For each facet dimension the counts answer "how many items would remain if
only this facet changed": an item is counted when it passes the parsed query
and every active filter except the dimension's own (self-exclusion).

Counting is a full scan per dimension, O(items x dimensions), with no index.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Final, Mapping, Optional, Sequence

from OshiViewer.core.models import CatalogItem
from OshiViewer.core.query import ParsedQuery
from OshiViewer.search.fields import FieldRegistry, FieldValue, REGISTRY
from OshiViewer.search.matcher import match_item

DEFAULT_FACET_LIMIT = 50


@dataclass(frozen=True, slots=True)
class FacetOption:
    value: str
    label: str
    count: int


@dataclass(frozen=True, slots=True)
class FacetDimension:
    """A filterable attribute dimension.

    Attributes:
        filter_key: Attribute name on `BrowseFilters`.
        field: Canonical field the values are extracted from.
        facet_name: Output key for counted options, None for filter-only
            dimensions.
        truncate: Whether options are cut to the facet limit.
    """

    filter_key: str
    field: str
    facet_name: Optional[str] = None
    truncate: bool = False


DIMENSIONS: Final[tuple[FacetDimension, ...]] = (
    FacetDimension("collection", "collection", "collections"),
    FacetDimension("item_type", "item_type", "item_types"),
    FacetDimension("era", "era", "eras"),
    FacetDimension("tradition", "tradition", "traditions"),
    FacetDimension("school", "school", "schools"),
    FacetDimension("blade_type", "type", "blade_types"),
    FacetDimension("smith", "smith", "smiths", truncate=True),
    FacetDimension("mei_status", "mei", "mei_statuses"),
    FacetDimension("nakago_condition", "nakago", "nakago_conditions"),
    FacetDimension("denrai", "denrai", "denrais", truncate=True),
    FacetDimension("kiwame", "kiwame", "kiwames"),
    FacetDimension("volume", "volume"),
    FacetDimension("is_ensemble", "ensemble"),
    FacetDimension("has_translation", "translated"),
)


@dataclass(frozen=True, slots=True)
class BrowseFilters:
    """Active filter panel state plus the raw query string.

    Unset (None) filters are inactive.
    """

    query: Optional[str] = None
    collection: Optional[str] = None
    volume: Optional[int] = None
    item_type: Optional[str] = None
    era: Optional[str] = None
    school: Optional[str] = None
    tradition: Optional[str] = None
    blade_type: Optional[str] = None
    smith: Optional[str] = None
    mei_status: Optional[str] = None
    nakago_condition: Optional[str] = None
    denrai: Optional[str] = None
    kiwame: Optional[str] = None
    is_ensemble: Optional[bool] = None
    has_translation: Optional[bool] = None

    def active(self) -> dict[str, Any]:
        """Return set filter values keyed by filter name, excluding the query."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "query" and getattr(self, f.name) is not None
        }


def _as_filter_map(filters: BrowseFilters | Mapping[str, Any] | None) -> dict[str, Any]:
    if filters is None:
        return {}
    if isinstance(filters, BrowseFilters):
        return filters.active()
    return {key: value for key, value in filters.items() if value is not None and key != "query"}


def _values(value: Optional[FieldValue]) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v]
    if isinstance(value, str) and not value:
        return []
    return [value]


def _passes(item: CatalogItem, dimension: FacetDimension, wanted: Any, registry: FieldRegistry) -> bool:
    values = _values(registry.value_of(item, dimension.field))
    if isinstance(wanted, bool):
        return any(v is wanted for v in values)
    return wanted in values


def _passes_all(
    item: CatalogItem,
    active: Mapping[str, Any],
    registry: FieldRegistry,
    *,
    skip: Optional[str] = None,
) -> bool:
    for dimension in DIMENSIONS:
        if dimension.filter_key == skip or dimension.filter_key not in active:
            continue
        if not _passes(item, dimension, active[dimension.filter_key], registry):
            return False
    return True


def apply_filters(
    items: Sequence[CatalogItem],
    filters: BrowseFilters | Mapping[str, Any] | None,
    query: ParsedQuery,
    *,
    registry: FieldRegistry = REGISTRY,
) -> list[CatalogItem]:
    """Return items passing every active filter and the parsed query."""
    active = _as_filter_map(filters)
    return [
        item
        for item in items
        if _passes_all(item, active, registry) and match_item(item, query, registry=registry)
    ]


def compute_facets(
    items: Sequence[CatalogItem],
    filters: BrowseFilters | Mapping[str, Any] | None,
    query: ParsedQuery,
    *,
    limit: int = DEFAULT_FACET_LIMIT,
    registry: FieldRegistry = REGISTRY,
) -> dict[str, list[FacetOption]]:
    """Compute per-dimension option counts with self-exclusion.

    Args:
        items: Working corpus.
        filters: Active filters, as `BrowseFilters` or a mapping keyed by
            filter name.
        query: Parsed query applied to every count.
        limit: Maximum options kept for high-cardinality dimensions
            (smiths, denrais).
        registry: Field registry used for extraction.

    Returns:
        Mapping of facet name to options sorted by count descending, then
        value ascending.
    """
    active = _as_filter_map(filters)
    candidates = [item for item in items if match_item(item, query, registry=registry)]

    facets: dict[str, list[FacetOption]] = {}
    for dimension in DIMENSIONS:
        if dimension.facet_name is None:
            continue

        counts: dict[str, int] = {}
        for item in candidates:
            if not _passes_all(item, active, registry, skip=dimension.filter_key):
                continue
            for value in set(_values(registry.value_of(item, dimension.field))):
                key = str(value)
                counts[key] = counts.get(key, 0) + 1

        ordered = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
        if dimension.truncate:
            ordered = ordered[:limit]
        facets[dimension.facet_name] = [FacetOption(value=v, label=v, count=c) for v, c in ordered]

    return facets
