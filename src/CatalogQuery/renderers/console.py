"""Console text output.

Renders a `ResultSet` listing followed by its suggestion lists and provides
ConsoleOutputWriter, which prints through the package logger.
"""

from __future__ import annotations

from CatalogQuery.core.models import ResultSet
from CatalogQuery.core.query import SavedQuery
from CatalogQuery.renderers.base import OutputWriter
from CatalogQuery.utils.log import log

EMPTY_PLACEHOLDER = "No records found."


def render_text(result: ResultSet) -> str:
    """Render a result set into a human-readable text block.

    Args:
        result: Result set to render.

    Returns:
        The listing (or a placeholder when empty) followed by one
        ``<field>: a | b | c`` line per suggestion list.
    """
    lines: list[str] = [result.text.rstrip("\n") if result.count else EMPTY_PLACEHOLDER, ""]
    for name, values in result.suggestions.items():
        lines.append(f"{name}: {' | '.join(values) if values else '-'}")
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(self, result: ResultSet, query: SavedQuery, parser_name: str) -> None:
        log.info("Matched %d records (parser=%s)", result.count, parser_name)
        for line in render_text(result).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
