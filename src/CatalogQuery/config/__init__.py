from __future__ import annotations

"""Public configuration API for CatalogQuery."""

from CatalogQuery.config.app import (
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from CatalogQuery.config.catalog import CatalogConfig
from CatalogQuery.config.output import OutputConfig
from CatalogQuery.config.query import QueryConfig
from CatalogQuery.config.runtime import RuntimeConfig
from CatalogQuery.config.transform import TransformConfig

__all__ = [
    "RuntimeConfig",
    "CatalogConfig",
    "QueryConfig",
    "OutputConfig",
    "TransformConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "check_cross_domain",
]
