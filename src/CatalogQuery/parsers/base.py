"""Shared contract and helpers for catalog parser variants."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol

from lxml import etree

from CatalogQuery.core.errors import LoadError
from CatalogQuery.core.filter import Filter
from CatalogQuery.core.models import CatalogSchema, Record, ResultSet, format_record

SourcePath = str | Path


class CatalogParser(Protocol):
    """Protocol for one load/query strategy over a catalog source."""

    name: str
    schema: CatalogSchema

    def load(self, source: SourcePath) -> None:
        """Read the source and replace the internal representation.

        Raises:
            LoadError: If the source cannot be read as this catalog. A variant
                that reads lazily may report later syntax errors from
                `filter_by` instead, also as LoadError.
        """
        raise NotImplementedError

    def filter_by(self, query: Filter) -> ResultSet:
        """Run the filter over the loaded representation.

        Raises:
            NotLoadedError: If no load has completed.
            LoadError: If a lazily read source turns out not to be well-formed.
            RecordValueError: If a numeric record field is not a number.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the representation and any open handle."""
        raise NotImplementedError


class ResultSetBuilder:
    """Accumulate matches into a ResultSet, numbering them in match order."""

    def __init__(self, schema: CatalogSchema) -> None:
        self.schema = schema
        self._entries: list[str] = []
        self._values: dict[str, list[str]] = {spec.name: [] for spec in schema.browsable_fields}

    def add(self, record: Record) -> int:
        number = len(self._entries) + 1
        self._entries.append(format_record(self.schema, record, number))
        for name, values in self._values.items():
            values.append(record[name])
        return number

    def build(self) -> ResultSet:
        return ResultSet(
            entries=self._entries,
            suggestions={name: dedup_preserve_order(values) for name, values in self._values.items()},
        )


def dedup_preserve_order(values: Iterable[str]) -> tuple[str, ...]:
    """Remove duplicates while preserving first occurrence order."""
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return tuple(unique)


# internal DTD entities expand to text; external entities are never loaded
ENTITY_POLICY = "internal"


def make_xml_parser() -> etree.XMLParser:
    """Return an lxml parser that never touches the network or loads external entities."""
    return etree.XMLParser(resolve_entities=ENTITY_POLICY, no_network=True)


def parse_document(source: SourcePath, schema: CatalogSchema) -> etree._ElementTree:
    """Parse a whole catalog file into an lxml tree.

    Raises:
        LoadError: If the file cannot be read, is not well-formed, or has the wrong root.
    """
    path = str(source)
    try:
        tree = etree.parse(path, make_xml_parser())
    except (OSError, etree.XMLSyntaxError) as error:
        raise LoadError(path, str(error)) from error
    check_root(path, tree.getroot(), schema)
    return tree


def check_root(path: str, root: etree._Element, schema: CatalogSchema) -> None:
    if root.tag != schema.root:
        raise LoadError(path, f"root element is <{root.tag}>, expected <{schema.root}>")


def element_text(element: etree._Element) -> str:
    """Return the text content of an element and all its descendants.

    Comments and processing instructions contribute their tail text only.
    """
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            parts.append(element_text(child))
        parts.append(child.tail or "")
    return "".join(parts)
