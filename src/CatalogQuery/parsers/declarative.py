"""Declarative-query parser variant.

Projects every record element into a `Record` with compiled XPath
expressions at load time, then answers queries with a lazy
filter-then-project pipeline over the in-memory sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from CatalogQuery.core.errors import MalformedRecordError, NotLoadedError
from CatalogQuery.core.filter import Filter
from CatalogQuery.core.models import CatalogSchema, Record, ResultSet, build_record, format_record
from CatalogQuery.parsers.base import SourcePath, dedup_preserve_order, parse_document
from CatalogQuery.utils.log import log

_STRING_VALUE = etree.XPath("string()")


@dataclass(slots=True)
class DeclarativeParser:
    """`CatalogParser` holding a flat list of fully-populated records."""

    schema: CatalogSchema
    name: str = "declarative"
    _select_records: etree.XPath = field(init=False, repr=False)
    _select_fields: dict[str, etree.XPath] = field(init=False, repr=False)
    _records: tuple[Record, ...] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._select_records = etree.XPath(f"/{self.schema.root}/{self.schema.record}")
        self._select_fields = {spec.name: etree.XPath(f"{spec.element}[1]") for spec in self.schema.fields}

    def load(self, source: SourcePath) -> None:
        """Parse the source and project all complete records.

        Raises:
            LoadError: If the source cannot be parsed as this catalog.
        """
        document = parse_document(source, self.schema)
        projected = (
            self._project(node, ordinal)
            for ordinal, node in enumerate(self._select_records(document), start=1)
        )
        self._records = tuple(record for record in projected if record is not None)
        log.info("Loaded %d records from %s (%s)", len(self._records), source, self.name)

    def _project(self, node: etree._Element, ordinal: int) -> Record | None:
        values: dict[str, str | None] = {}
        for name, select in self._select_fields.items():
            found = select(node)
            values[name] = str(_STRING_VALUE(found[0])) if found else None
        try:
            return build_record(self.schema, values, ordinal=ordinal)
        except MalformedRecordError as error:
            log.warning("Skipping record: %s", error)
            return None

    def filter_by(self, query: Filter) -> ResultSet:
        """Filter the projected records and collect distinct browsable values.

        Raises:
            NotLoadedError: If no load has completed.
            RecordValueError: If a matched-against numeric field is not a number.
        """
        if self._records is None:
            raise NotLoadedError(f"{self.name} parser has no loaded catalog")
        matches = tuple(record for record in self._records if query.is_match(record))
        result = ResultSet(
            entries=[format_record(self.schema, record, number) for number, record in enumerate(matches, start=1)],
            suggestions={
                spec.name: dedup_preserve_order(record[spec.name] for record in matches)
                for spec in self.schema.browsable_fields
            },
        )
        log.debug("Query matched %d of %d records (%s)", result.count, len(self._records), self.name)
        return result

    def close(self) -> None:
        self._records = None
