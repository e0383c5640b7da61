"""Application config orchestration and YAML loading entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from CatalogQuery.config.catalog import CatalogConfig, check_catalog, load_catalog
from CatalogQuery.config.output import OutputConfig, check_output, load_output
from CatalogQuery.config.query import QueryConfig, check_query, load_query
from CatalogQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime
from CatalogQuery.config.transform import TransformConfig, check_transform, load_transform
from CatalogQuery.core.errors import UnknownFieldError
from CatalogQuery.core.filter import Filter


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    catalog: CatalogConfig
    query: QueryConfig
    output: OutputConfig
    transform: TransformConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    catalog = load_catalog(raw)
    query = load_query(raw)
    output = load_output(raw)
    transform = load_transform(raw)

    check_runtime(runtime)
    check_catalog(catalog)
    check_query(query)
    check_output(output)
    check_transform(transform)

    config = AppConfig(
        runtime=runtime,
        catalog=catalog,
        query=query,
        output=output,
        transform=transform,
    )
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(
    config_path: Path, default_path: Path = Path("config/default.yml")
) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    merged = merge_config_dicts(base, override)
    return parse_config_dict(merged)


def check_cross_domain(config: AppConfig) -> None:
    """Validate saved query keys against the configured catalog schema."""
    probe = Filter(config.catalog.schema)
    for idx, saved in enumerate(config.query.queries):
        for key in saved.settings:
            try:
                probe.kind_of(key)
            except UnknownFieldError as error:
                raise ValueError(
                    f"queries[{idx}].{key} is not a filter field; expected one of {sorted(probe.keys)}"
                ) from error


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; lists and scalars in override replace base."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
