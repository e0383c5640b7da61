"""Record filter: substring fragments plus numeric ranges.

Filter fields are set by name through a static dispatch table built from the
catalog schema. Text fragments are trimmed and case-folded; numeric bounds use
a fixed "." decimal convention and fail closed on unparsable input.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any, Final

from CatalogQuery.core.errors import FilterConversionError, RecordValueError, UnknownFieldError
from CatalogQuery.core.models import CatalogSchema, FieldKind, Record

_NUMBER_RE: Final = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_CAMEL_RE: Final = re.compile(r"(?<=[a-z0-9])([A-Z])")

FROM_SUFFIX: Final = "_from"
TO_SUFFIX: Final = "_to"

# (unconstrained, impossible) per bound side
_FROM_DEFAULTS: Final = (-math.inf, math.inf)
_TO_DEFAULTS: Final = (math.inf, -math.inf)


def parse_number(raw: str) -> float:
    """Parse decimal text independent of locale.

    Args:
        raw: Text such as "12.5", "-3", "1e3". Surrounding whitespace is ignored.

    Returns:
        Parsed float.

    Raises:
        FilterConversionError: If the text is empty or not a plain decimal number.
    """
    text = raw.strip()
    if not text:
        raise FilterConversionError(raw, empty=True)
    if not _NUMBER_RE.fullmatch(text):
        raise FilterConversionError(raw, empty=False)
    return float(text)


def normalize_key(name: str) -> str:
    """Map a filter key to its canonical snake_case form (``yearFrom`` -> ``year_from``)."""
    return _CAMEL_RE.sub(r"_\1", name.strip()).lower()


class Filter:
    """Current query predicate for one catalog schema."""

    def __init__(self, schema: CatalogSchema) -> None:
        self.schema = schema
        self._fragments: dict[str, str] = {spec.name: "" for spec in schema.text_fields}
        self._lower: dict[str, float] = {spec.name: _FROM_DEFAULTS[0] for spec in schema.number_fields}
        self._upper: dict[str, float] = {spec.name: _TO_DEFAULTS[0] for spec in schema.number_fields}
        self._setters = self._build_setters()

    def _build_setters(self) -> dict[str, tuple[FieldKind, Callable[[str], None]]]:
        entries: list[tuple[str, FieldKind, Callable[[str], None]]] = []
        for spec in self.schema.text_fields:
            entries.append((spec.name, FieldKind.TEXT, self._text_setter(spec.name)))
        for spec in self.schema.number_fields:
            entries.append((spec.name + FROM_SUFFIX, FieldKind.NUMBER, self._bound_setter(self._lower, spec.name, _FROM_DEFAULTS)))
            entries.append((spec.name + TO_SUFFIX, FieldKind.NUMBER, self._bound_setter(self._upper, spec.name, _TO_DEFAULTS)))

        setters: dict[str, tuple[FieldKind, Callable[[str], None]]] = {}
        for key, kind, setter in entries:
            if key in setters:
                raise ValueError(f"Filter key {key!r} is claimed by more than one schema field")
            setters[key] = (kind, setter)
        return setters

    def _text_setter(self, name: str) -> Callable[[str], None]:
        def assign(raw: str) -> None:
            self._fragments[name] = raw.strip().casefold()

        return assign

    @staticmethod
    def _bound_setter(
        bounds: dict[str, float],
        name: str,
        defaults: tuple[float, float],
    ) -> Callable[[str], None]:
        unconstrained, impossible = defaults

        def assign(raw: str) -> None:
            try:
                bounds[name] = parse_number(raw)
            except FilterConversionError as error:
                bounds[name] = unconstrained if error.empty else impossible

        return assign

    @property
    def keys(self) -> tuple[str, ...]:
        """All settable filter keys in schema order."""
        return tuple(self._setters)

    def kind_of(self, name: str) -> FieldKind:
        return self._lookup(name)[0]

    def set_field(self, name: str, raw_value: str | None) -> None:
        """Set one filter field from raw user text.

        Never fails on the value: empty numeric input clears the bound and
        unparsable numeric input makes the range impossible.

        Args:
            name: Text field name, or ``<number field>_from`` / ``<number field>_to``.
            raw_value: Raw text; None is treated as empty.

        Raises:
            UnknownFieldError: If the name is not a key of this schema.
        """
        _, setter = self._lookup(name)
        setter(raw_value or "")

    def _lookup(self, name: str) -> tuple[FieldKind, Callable[[str], None]]:
        entry = self._setters.get(normalize_key(name))
        if entry is None:
            raise UnknownFieldError(name)
        return entry

    def fragment(self, name: str) -> str:
        return self._fragments[name]

    def bounds(self, name: str) -> tuple[float, float]:
        return self._lower[name], self._upper[name]

    def is_match(self, record: Record) -> bool:
        """Return True when every fragment and numeric range accepts the record.

        Raises:
            RecordValueError: If a numeric record field is not parseable.
        """
        for name, fragment in self._fragments.items():
            if fragment and fragment not in record[name].casefold():
                return False
        for name, lower in self._lower.items():
            value = _record_number(record, name)
            if not lower <= value <= self._upper[name]:
                return False
        return True

    def as_dict(self) -> dict[str, Any]:
        """Return the non-default settings, for logging and reports."""
        active: dict[str, Any] = {name: value for name, value in self._fragments.items() if value}
        for name in self._lower:
            lower, upper = self.bounds(name)
            if lower != _FROM_DEFAULTS[0]:
                active[name + FROM_SUFFIX] = lower
            if upper != _TO_DEFAULTS[0]:
                active[name + TO_SUFFIX] = upper
        return active


def _record_number(record: Record, name: str) -> float:
    raw = record[name]
    try:
        return parse_number(raw)
    except FilterConversionError as error:
        raise RecordValueError(name, raw) from error
