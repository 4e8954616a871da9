"""Browse service: one filter-panel request against the catalog corpus."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, Sequence

from OshiViewer.core.models import CatalogItem
from OshiViewer.core.query import ParsedQuery
from OshiViewer.search.facets import DEFAULT_FACET_LIMIT, BrowseFilters, FacetOption, apply_filters, compute_facets
from OshiViewer.search.parser import parse_query, summarize_query
from OshiViewer.utils.log import log

VALID_COLLECTIONS = frozenset({"Tokuju", "Juyo"})
DEFAULT_MAX_QUERY_LENGTH = 500


@dataclass(frozen=True, slots=True)
class CorpusHints:
    """Narrowing hints passed to a corpus provider.

    Providers may ignore hints; the browse service re-applies the collection
    and volume filters on whatever it receives.
    """

    collection: str | None = None
    volume: int | None = None
    with_metadata: bool = True


class CorpusProvider(Protocol):
    """Protocol for a catalog corpus source."""

    name: str

    def list_corpus(self, hints: CorpusHints) -> Sequence[CatalogItem]:
        """Return the working corpus for the given hints."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class BrowseResult:
    """Outcome of one browse request.

    Attributes:
        items: Matching items ordered by collection, volume, item.
        total: Number of matching items.
        facets: Facet name to options, counted with self-exclusion.
        query: The parsed query, including diagnostics.
    """

    items: tuple[CatalogItem, ...]
    total: int
    facets: dict[str, list[FacetOption]]
    query: ParsedQuery


@dataclass(slots=True)
class BrowseService:
    """Application service behind the filter panel."""

    provider: CorpusProvider
    max_query_length: int = DEFAULT_MAX_QUERY_LENGTH
    facet_limit: int = DEFAULT_FACET_LIMIT

    def browse(self, filters: BrowseFilters) -> BrowseResult:
        """Filter the corpus and count facets for one panel state.

        Args:
            filters: Query string plus active filters.

        Returns:
            Browse result with matching items and facet counts.

        Raises:
            ValueError: If the collection is unknown or the volume is below 1.
        """
        _check_filters(filters)

        raw_query = filters.query or ""
        if len(raw_query) > self.max_query_length:
            log.warning("Query truncated: length=%d max=%d", len(raw_query), self.max_query_length)
            raw_query = raw_query[: self.max_query_length]
            filters = replace(filters, query=raw_query)

        # Collection and volume are filtered below so their facets keep self-exclusion.
        corpus = self.provider.list_corpus(CorpusHints())
        log.debug("Corpus loaded: provider=%s count=%d", getattr(self.provider, "name", "unknown"), len(corpus))

        parsed = parse_query(raw_query)
        for diagnostic in parsed.diagnostics:
            if diagnostic.severity != "info":
                log.warning("Query %s: %s", diagnostic.severity, diagnostic.message)

        matched = apply_filters(corpus, filters, parsed)
        matched.sort(key=lambda item: item.ref)
        facets = compute_facets(corpus, filters, parsed, limit=self.facet_limit)

        log.info(
            "Browse completed: query=%s filters=%d matched=%d corpus=%d",
            summarize_query(parsed),
            len(filters.active()),
            len(matched),
            len(corpus),
        )
        return BrowseResult(items=tuple(matched), total=len(matched), facets=facets, query=parsed)

    def list_volume(self, collection: str, volume: int) -> list[CatalogItem]:
        """Return the summary items of one volume ordered by item number.

        Raises:
            ValueError: If the collection is unknown or the volume is below 1.
        """
        _check_filters(BrowseFilters(collection=collection, volume=volume))
        hints = CorpusHints(collection=collection, volume=volume, with_metadata=False)
        items = [
            item
            for item in self.provider.list_corpus(hints)
            if item.collection == collection and item.volume == volume
        ]
        return sorted(items, key=lambda item: item.item)


def _check_filters(filters: BrowseFilters) -> None:
    if filters.collection is not None and filters.collection not in VALID_COLLECTIONS:
        raise ValueError(f"Unknown collection: {filters.collection} (expected one of {sorted(VALID_COLLECTIONS)})")
    if filters.volume is not None and filters.volume < 1:
        raise ValueError(f"Volume must be 1 or greater: {filters.volume}")
