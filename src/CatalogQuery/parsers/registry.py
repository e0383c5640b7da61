"""Parser registry and builders for catalog parser variants."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from CatalogQuery.core.models import CatalogSchema
    from CatalogQuery.parsers.base import CatalogParser

ParserBuilder = Callable[["CatalogSchema"], "CatalogParser"]


def build_parser(parser_name: str, *, schema: CatalogSchema) -> CatalogParser:
    """Build an unloaded parser instance from its registered name.

    Args:
        parser_name: Variant identifier from ``query.parser``.
        schema: Catalog schema the parser extracts.

    Returns:
        CatalogParser: Fresh parser; call ``load`` before querying.

    Raises:
        ValueError: If ``parser_name`` is not registered.
    """
    builder = _parser_builders().get(parser_name.strip().lower())
    if builder is None:
        raise ValueError(f"Unsupported parser: {parser_name}")
    return builder(schema)


def supported_parser_names() -> tuple[str, ...]:
    """Return all parser names in registry order."""
    return tuple(_parser_builders().keys())


def _parser_builders() -> dict[str, ParserBuilder]:
    """Return parser builder registry."""
    return {
        "declarative": _build_declarative_parser,
        "tree": _build_tree_parser,
        "streaming": _build_streaming_parser,
    }


def _build_declarative_parser(schema: CatalogSchema) -> CatalogParser:
    from CatalogQuery.parsers.declarative import DeclarativeParser

    return DeclarativeParser(schema=schema)


def _build_tree_parser(schema: CatalogSchema) -> CatalogParser:
    from CatalogQuery.parsers.tree import TreeParser

    return TreeParser(schema=schema)


def _build_streaming_parser(schema: CatalogSchema) -> CatalogParser:
    from CatalogQuery.parsers.streaming import StreamingParser

    return StreamingParser(schema=schema)
