"""Transform domain configuration for the display artifact."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CatalogQuery.config.common import check_non_empty, expect_str, get_optional_value, get_section


@dataclass(frozen=True, slots=True)
class TransformConfig:
    """Stylesheet applied to the catalog and where the result is written."""

    stylesheet: str = "config/catalog.xsl"
    target: str = "output/catalog.html"


def load_transform(raw: Mapping[str, Any]) -> TransformConfig:
    """Load transform domain config from the optional ``transform`` section."""
    section = get_section(raw, "transform", required=False)
    defaults = TransformConfig()
    return TransformConfig(
        stylesheet=expect_str(get_optional_value(section, "stylesheet", defaults.stylesheet), "transform.stylesheet"),
        target=expect_str(get_optional_value(section, "target", defaults.target), "transform.target"),
    )


def check_transform(config: TransformConfig) -> None:
    check_non_empty(config.stylesheet, "transform.stylesheet")
    check_non_empty(config.target, "transform.target")
