"""Session layer for CatalogQuery.

Wraps a loaded parser and the caller's current filter, and provides the
factory used by the CLI to open a session from configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from CatalogQuery.services.session import QuerySession

if TYPE_CHECKING:
    from CatalogQuery.config import AppConfig


def create_session(
    config: AppConfig,
    *,
    source: Path | None = None,
    parser_name: str | None = None,
) -> QuerySession:
    """Open a query session from configuration.

    Args:
        config: Application configuration.
        source: Optional catalog path overriding ``catalog.source``.
        parser_name: Optional variant overriding ``query.parser``.

    Returns:
        Loaded QuerySession.
    """
    return QuerySession.open(
        config.catalog.schema,
        source if source is not None else Path(config.catalog.source),
        parser_name or config.query.parser,
    )


__all__ = [
    "QuerySession",
    "create_session",
]
