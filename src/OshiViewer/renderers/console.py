"""Console text output renderers.

Renders browse results into human-friendly text lines sent through the
package logger.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from OshiViewer.renderers.base import OutputWriter
from OshiViewer.renderers.mapper import map_items_to_views
from OshiViewer.renderers.view_models import ItemView
from OshiViewer.search.facets import BrowseFilters, FacetOption
from OshiViewer.services.browse import BrowseResult
from OshiViewer.utils.log import log

_FACETS_SHOWN = 5


def _fmt_nagasa(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:g} cm"


def render_text(items: Iterable[ItemView]) -> str:
    """Render item views into a human-readable text block.

    Args:
        items: Iterable of item views.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, view in enumerate(items, start=1):
        name = view.name or "Unknown maker"
        if view.name_kanji:
            name = f"{name} ({view.name_kanji})"
        lines.append(f"{idx}. [{view.ref}] {name}")

        kind = " / ".join(part for part in (view.item_type, view.form) if part)
        if kind:
            lines.append(f"   Type: {kind}")
        lineage = " / ".join(part for part in (view.tradition, view.school, view.era) if part)
        if lineage:
            lines.append(f"   School: {lineage}")
        if view.nagasa is not None:
            lines.append(f"   Nagasa: {_fmt_nagasa(view.nagasa)}")
        if view.mei_status or view.nakago_condition:
            lines.append(f"   Mei: {view.mei_status or '-'}  Nakago: {view.nakago_condition or '-'}")
        if view.has_translation:
            lines.append("   Translation available")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_facets(facets: Mapping[str, list[FacetOption]], *, limit: int = _FACETS_SHOWN) -> str:
    """Render the first options of every non-empty facet, one facet per line."""
    lines: list[str] = []
    for name, options in facets.items():
        if not options:
            continue
        shown = ", ".join(f"{option.label} ({option.count})" for option in options[:limit])
        more = f", +{len(options) - limit} more" if len(options) > limit else ""
        lines.append(f"{name}: {shown}{more}")
    return "\n".join(lines)


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging.

    Args:
        max_results: Items printed per result, None for all.
    """

    def __init__(self, max_results: int | None = None) -> None:
        self.max_results = max_results

    def write_browse_result(self, result: BrowseResult, filters: BrowseFilters) -> None:
        shown = result.items if self.max_results is None else result.items[: self.max_results]
        log.info("Matched %d item(s), showing %d", result.total, len(shown))
        for diagnostic in result.query.diagnostics:
            log.info("Query note [%s]: %s", diagnostic.severity, diagnostic.message)
        for line in render_text(map_items_to_views(shown)).splitlines():
            log.info(line)
        for line in render_facets(result.facets).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
