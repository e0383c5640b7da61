"""Output domain configuration for result rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CatalogQuery.config.common import (
    check_non_empty,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str = "output"
    formats: tuple[str, ...] = ("console",)


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from the optional ``output`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "output", required=False)
    defaults = OutputConfig()
    formats = expect_str_list(get_optional_value(section, "formats", list(defaults.formats)), "output.formats")
    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", defaults.base_dir), "output.base_dir"),
        formats=tuple(dict.fromkeys(item.strip().lower() for item in formats)),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If values violate output constraints.
    """
    check_non_empty(config.base_dir, "output.base_dir")
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
