"""JSON output.

Renders result sets into JSON-serializable objects and provides
JsonFileWriter, which writes one report file per run.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from CatalogQuery.core.models import ResultSet
from CatalogQuery.core.query import SavedQuery
from CatalogQuery.renderers.base import OutputWriter
from CatalogQuery.utils.log import log


def render_json(result: ResultSet) -> dict[str, Any]:
    """Render a result set into a JSON-serializable dict."""
    return {
        "count": result.count,
        "entries": list(result.entries),
        "suggestions": {name: list(values) for name, values in result.suggestions.items()},
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write them to a JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_query_result(self, result: ResultSet, query: SavedQuery, parser_name: str) -> None:
        self.all_results.append(
            {
                "name": query.name,
                "parser": parser_name,
                "filter": dict(query.settings),
                "result": render_json(result),
            }
        )

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
