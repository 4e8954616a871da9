"""JSON output renderers.

Renders browse results into JSON-serializable objects and provides the
JsonFileWriter implementation for command output.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Iterable

from OshiViewer.renderers.base import OutputWriter
from OshiViewer.renderers.mapper import map_items_to_views
from OshiViewer.renderers.view_models import ItemView
from OshiViewer.search.facets import BrowseFilters
from OshiViewer.services.browse import BrowseResult
from OshiViewer.utils.log import log


def render_json(items: Iterable[ItemView]) -> list[dict]:
    """Render item views into JSON-serializable Python objects.

    Args:
        items: Iterable of item views.

    Returns:
        A list of dicts, one per item.
    """
    return [asdict(view) for view in items]


def render_browse_payload(result: BrowseResult, filters: BrowseFilters) -> dict:
    """Build the JSON payload for one browse request.

    Returns:
        Dict with the query (including diagnostics), the active filters, the
        total, the items and the facets.
    """
    parsed = result.query
    return {
        "query": {
            "original": parsed.original,
            "text_terms": list(parsed.text_terms),
            "comparisons": [
                {"field": c.field, "operator": c.operator, "value": c.value} for c in parsed.comparisons
            ],
            "field_matches": [{"field": m.field, "value": m.value} for m in parsed.field_matches],
            "negations": list(parsed.negations),
            "phrases": list(parsed.phrases),
            "diagnostics": [
                {"severity": d.severity, "code": d.code, "message": d.message, "raw": d.raw}
                for d in parsed.diagnostics
            ],
        },
        "filters": filters.active(),
        "total": result.total,
        "items": render_json(map_items_to_views(result.items)),
        "facets": {
            name: [{"value": o.value, "label": o.label, "count": o.count} for o in options]
            for name, options in result.facets.items()
        },
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []

    def write_browse_result(self, result: BrowseResult, filters: BrowseFilters) -> None:
        self.all_results.append(render_browse_payload(result, filters))

    def finalize(self, action: str) -> Path:
        """Write accumulated results to `<base_dir>/json/<action>_<timestamp>.json`.

        Returns:
            Path of the written file.
        """
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
        return output_path
