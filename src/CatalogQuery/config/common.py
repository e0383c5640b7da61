"""Shared helpers for configuration loading and validation."""

from __future__ import annotations

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from a config mapping.

    Args:
        raw: Parent configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or an empty mapping for optional missing sections.

    Raises:
        ValueError: If the section is required but missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a required field value, naming the full key path when missing."""
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return optional field value with default."""
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_scalar_text(value: Any, config_key: str) -> str:
    """Validate a YAML scalar used as raw filter text and return it as a string.

    YAML turns ``year_from: 2000`` into an int; filter input is text, so
    numbers are converted back with ``str``.
    """
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"{config_key} must be a string or number")
    return str(value)


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
        out.append(item)
    return out


def expect_mapping_list(value: Any, config_key: str) -> list[Mapping[str, Any]]:
    """Validate a list of mappings."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    for idx, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise TypeError(f"{config_key}[{idx}] must be an object")
    return list(value)


def check_non_empty(value: str, config_key: str) -> None:
    """Reject empty or whitespace-only strings."""
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")
