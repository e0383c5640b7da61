from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from CatalogQuery.core.errors import MalformedRecordError


class FieldKind(str, Enum):
    """How a record field takes part in filtering."""

    TEXT = "text"
    NUMBER = "number"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaration of one record field.

    Attributes:
        name: Field identifier used by filters and suggestion lists.
        element: Child element tag holding the field text in the source.
        label: Display label used in the formatted listing.
        kind: Text fields match by substring, number fields by range.
        browsable: Whether distinct values are collected for suggestions.
    """

    name: str
    element: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    browsable: bool = False


@dataclass(frozen=True, slots=True)
class CatalogSchema:
    """Shape of one catalog type.

    Attributes:
        root: Tag of the root collection element.
        record: Tag of each record element (direct children of the root).
        heading: Label used for the numbered entry heading.
        fields: Ordered field declarations; order drives the listing layout.
    """

    root: str
    record: str
    heading: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def text_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.kind is FieldKind.TEXT)

    @property
    def number_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.kind is FieldKind.NUMBER)

    @property
    def browsable_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.browsable)

    def by_element(self) -> dict[str, FieldSpec]:
        """Return a lookup of field declarations keyed by element tag."""
        return {spec.element: spec for spec in self.fields}


BOOK_CATALOG = CatalogSchema(
    root="catalog",
    record="book",
    heading="Book",
    fields=(
        FieldSpec("author", "author", "Author", FieldKind.TEXT, browsable=True),
        FieldSpec("title", "title", "Title", FieldKind.TEXT, browsable=True),
        FieldSpec("description", "description", "Description", FieldKind.TEXT),
        FieldSpec("genre", "genre", "Genre", FieldKind.TEXT, browsable=True),
        FieldSpec("price", "price", "Price", FieldKind.NUMBER),
        FieldSpec("year", "publishYear", "Year", FieldKind.NUMBER),
    ),
)


@dataclass(frozen=True, slots=True)
class Record:
    """One complete catalog item; every schema field holds raw text."""

    values: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> str:
        return self.values[name]


def build_record(schema: CatalogSchema, values: Mapping[str, str | None], *, ordinal: int) -> Record:
    """Freeze collected field values into a Record.

    Args:
        schema: Catalog schema naming the required fields.
        values: Field name to text; absent or None means the field was not seen.
        ordinal: 1-based position of the record element in the source.

    Returns:
        A complete Record.

    Raises:
        MalformedRecordError: If any schema field is missing.
    """
    missing = tuple(name for name in schema.field_names if values.get(name) is None)
    if missing:
        raise MalformedRecordError(ordinal, missing)
    return Record({name: values[name] for name in schema.field_names})


def format_record(schema: CatalogSchema, record: Record, number: int) -> str:
    """Render one numbered listing entry, blank line included."""
    lines = [f"{schema.heading} No.{number}"]
    lines.extend(f"{spec.label}: {record[spec.name]}" for spec in schema.fields)
    return "\n".join(lines) + "\n\n"


@dataclass(frozen=True, slots=True)
class ResultSet:
    """Outcome of one query.

    Attributes:
        entries: Formatted listing entries, numbered from 1 in match order.
        suggestions: Browsable field name to distinct values, first occurrence first.
    """

    entries: tuple[str, ...] = ()
    suggestions: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(values) for name, values in self.suggestions.items()}
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "suggestions", MappingProxyType(frozen))

    @property
    def text(self) -> str:
        """Concatenated listing; empty string when nothing matched."""
        return "".join(self.entries)

    @property
    def count(self) -> int:
        return len(self.entries)

    def values_for(self, name: str) -> Sequence[str]:
        """Return distinct values collected for a browsable field."""
        return self.suggestions.get(name, ())

    @classmethod
    def empty(cls, schema: CatalogSchema) -> ResultSet:
        return cls(suggestions={spec.name: () for spec in schema.browsable_fields})
