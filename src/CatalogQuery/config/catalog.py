"""Catalog domain configuration: source location and record schema."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Mapping

from CatalogQuery.config.common import (
    check_non_empty,
    expect_bool,
    expect_mapping_list,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)
from CatalogQuery.core.filter import FROM_SUFFIX, TO_SUFFIX
from CatalogQuery.core.models import CatalogSchema, FieldKind, FieldSpec

_ALLOWED_KINDS = {kind.value for kind in FieldKind}
_FIELD_NAME_RE = re.compile(r"[a-z][a-z0-9_]*")


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Catalog source and schema.

    Attributes:
        source: Catalog file path, after applying the ``source_env`` override.
        source_env: Environment variable that overrides ``source`` when set.
        schema: Record shape extracted by every parser variant.
    """

    source: str
    source_env: str
    schema: CatalogSchema


def load_catalog(raw: Mapping[str, Any]) -> CatalogConfig:
    """Load catalog domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed catalog configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "catalog", required=True)
    source_env = expect_str(get_optional_value(section, "source_env", ""), "catalog.source_env")
    source = expect_str(get_required_value(section, "source", "catalog.source"), "catalog.source")
    if source_env and os.getenv(source_env):
        source = os.environ[source_env]

    fields = expect_mapping_list(get_required_value(section, "fields", "catalog.fields"), "catalog.fields")
    schema = CatalogSchema(
        root=expect_str(get_required_value(section, "root", "catalog.root"), "catalog.root"),
        record=expect_str(get_required_value(section, "record", "catalog.record"), "catalog.record"),
        heading=expect_str(get_optional_value(section, "heading", "Record"), "catalog.heading"),
        fields=tuple(_parse_field(item, f"catalog.fields[{idx}]") for idx, item in enumerate(fields)),
    )
    return CatalogConfig(source=source, source_env=source_env, schema=schema)


def _parse_field(item: Mapping[str, Any], config_key: str) -> FieldSpec:
    name = expect_str(get_required_value(item, "name", f"{config_key}.name"), f"{config_key}.name")
    kind = expect_str(get_optional_value(item, "kind", FieldKind.TEXT.value), f"{config_key}.kind").lower()
    if kind not in _ALLOWED_KINDS:
        raise ValueError(f"{config_key}.kind must be one of {sorted(_ALLOWED_KINDS)}")
    return FieldSpec(
        name=name,
        element=expect_str(get_optional_value(item, "element", name), f"{config_key}.element"),
        label=expect_str(get_optional_value(item, "label", name.capitalize()), f"{config_key}.label"),
        kind=FieldKind(kind),
        browsable=expect_bool(get_optional_value(item, "browsable", False), f"{config_key}.browsable"),
    )


def check_catalog(config: CatalogConfig) -> None:
    """Validate catalog domain constraints.

    Raises:
        ValueError: If values violate catalog constraints.
    """
    schema = config.schema
    check_non_empty(config.source, "catalog.source")
    check_non_empty(schema.root, "catalog.root")
    check_non_empty(schema.record, "catalog.record")
    if not schema.fields:
        raise ValueError("catalog.fields must include at least one field")

    seen_names: set[str] = set()
    seen_elements: set[str] = set()
    for idx, spec in enumerate(schema.fields):
        key = f"catalog.fields[{idx}]"
        check_non_empty(spec.name, f"{key}.name")
        check_non_empty(spec.element, f"{key}.element")
        if not _FIELD_NAME_RE.fullmatch(spec.name):
            raise ValueError(f"{key}.name must be lowercase snake_case: {spec.name!r}")
        if spec.name in seen_names:
            raise ValueError(f"{key}.name duplicates field {spec.name!r}")
        if spec.element in seen_elements:
            raise ValueError(f"{key}.element duplicates element {spec.element!r}")
        if spec.browsable and spec.kind is not FieldKind.TEXT:
            raise ValueError(f"{key}.browsable requires kind=text")
        seen_names.add(spec.name)
        seen_elements.add(spec.element)

    range_keys = {spec.name + suffix for spec in schema.number_fields for suffix in (FROM_SUFFIX, TO_SUFFIX)}
    for idx, spec in enumerate(schema.fields):
        if spec.kind is FieldKind.TEXT and spec.name in range_keys:
            raise ValueError(f"catalog.fields[{idx}].name {spec.name!r} collides with a numeric range filter key")
