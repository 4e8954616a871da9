"""Catalog query engine.

Rich query search over sword, fitting and mounting records.

Example:
    query = parse_query("Soshu nagasa>70 mei:kinzogan -wakizashi")
    results = filter_items(items, query)
"""

from __future__ import annotations

from typing import Sequence

from OshiViewer.core.models import CatalogItem
from OshiViewer.core.query import Comparison, Diagnostic, FieldMatch, ParsedQuery
from OshiViewer.search.facets import (
    BrowseFilters,
    DEFAULT_FACET_LIMIT,
    DIMENSIONS,
    FacetDimension,
    FacetOption,
    apply_filters,
    compute_facets,
)
from OshiViewer.search.fields import (
    FIELD_DEFINITIONS,
    REGISTRY,
    FieldDefinition,
    FieldRegistry,
    get_all_field_names,
    get_field_definition,
    get_field_value,
    get_searchable_text,
    resolve_field_name,
)
from OshiViewer.search.matcher import MatchResult, filter_items, filter_items_with_details, match_item
from OshiViewer.search.parser import is_empty_query, parse_query, summarize_query, validate_query
from OshiViewer.search.shortcuts import expand_token, preprocess_query
from OshiViewer.search.tokenizer import Token, tokenize, tokenize_simple


def search(items: Sequence[CatalogItem], query: str) -> tuple[list[CatalogItem], ParsedQuery]:
    """Parse a query string and filter items in one step.

    Args:
        items: Working corpus.
        query: Raw query string.

    Returns:
        Tuple of (matching items, parsed query).
    """
    parsed = parse_query(query)
    return filter_items(items, parsed), parsed


__all__ = [
    "BrowseFilters",
    "Comparison",
    "DEFAULT_FACET_LIMIT",
    "DIMENSIONS",
    "Diagnostic",
    "FIELD_DEFINITIONS",
    "FacetDimension",
    "FacetOption",
    "FieldDefinition",
    "FieldMatch",
    "FieldRegistry",
    "MatchResult",
    "ParsedQuery",
    "REGISTRY",
    "Token",
    "apply_filters",
    "compute_facets",
    "expand_token",
    "filter_items",
    "filter_items_with_details",
    "get_all_field_names",
    "get_field_definition",
    "get_field_value",
    "get_searchable_text",
    "is_empty_query",
    "match_item",
    "parse_query",
    "preprocess_query",
    "resolve_field_name",
    "search",
    "summarize_query",
    "tokenize",
    "tokenize_simple",
    "validate_query",
]
