"""Query domain configuration: parser variant and saved queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CatalogQuery.config.common import (
    expect_mapping_list,
    expect_scalar_text,
    expect_str,
    get_optional_value,
    get_section,
)
from CatalogQuery.core.query import SavedQuery
from CatalogQuery.parsers.registry import supported_parser_names

_NAME_KEY = "NAME"
_ALLOWED_PARSERS = frozenset(supported_parser_names())


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Store the default parser variant and the saved queries to run."""

    parser: str
    queries: tuple[SavedQuery, ...]


def load_query(raw: Mapping[str, Any]) -> QueryConfig:
    """Load query domain config from raw mapping.

    ``queries`` is optional; without it a single unconstrained query runs.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "query", required=False)
    parser = expect_str(get_optional_value(section, "parser", "declarative"), "query.parser")

    queries_obj = raw.get("queries")
    if queries_obj is None:
        queries: tuple[SavedQuery, ...] = (SavedQuery(name=None, settings={}),)
    else:
        items = expect_mapping_list(queries_obj, "queries")
        queries = tuple(parse_saved_query(item, f"queries[{idx}]") for idx, item in enumerate(items))
    return QueryConfig(parser=parser.strip().lower(), queries=queries)


def parse_saved_query(obj: Mapping[str, Any], config_key: str) -> SavedQuery:
    """Parse one ``{NAME, <filter key>: <raw text>}`` mapping."""
    name_obj = obj.get(_NAME_KEY)
    name = expect_str(name_obj, f"{config_key}.{_NAME_KEY}") if name_obj is not None else None
    settings = {
        str(key): expect_scalar_text(value, f"{config_key}.{key}")
        for key, value in obj.items()
        if key != _NAME_KEY
    }
    return SavedQuery(name=name, settings=settings)


def check_query(config: QueryConfig) -> None:
    """Validate query domain constraints.

    Raises:
        ValueError: If values violate query constraints.
    """
    if config.parser not in _ALLOWED_PARSERS:
        raise ValueError(f"query.parser must be one of {sorted(_ALLOWED_PARSERS)}")
    if not config.queries:
        raise ValueError("queries must include at least one query")
