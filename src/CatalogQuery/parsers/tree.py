"""Tree-navigation parser variant.

Keeps the whole element tree in memory and re-walks the record nodes on every
query, pulling field text out by structural child lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from CatalogQuery.core.errors import MalformedRecordError, NotLoadedError
from CatalogQuery.core.filter import Filter
from CatalogQuery.core.models import CatalogSchema, Record, ResultSet, build_record
from CatalogQuery.parsers.base import ResultSetBuilder, SourcePath, element_text, parse_document
from CatalogQuery.utils.log import log


@dataclass(slots=True)
class TreeParser:
    """`CatalogParser` backed by an addressable lxml element tree."""

    schema: CatalogSchema
    name: str = "tree"
    _root: etree._Element | None = field(default=None, init=False, repr=False)

    def load(self, source: SourcePath) -> None:
        """Parse the source into a tree, replacing any previous one.

        Raises:
            LoadError: If the source cannot be parsed as this catalog.
        """
        root = parse_document(source, self.schema).getroot()
        self._root = root
        log.info(
            "Loaded tree with %d record nodes from %s (%s)",
            sum(1 for _ in root.iterchildren(self.schema.record)),
            source,
            self.name,
        )

    def filter_by(self, query: Filter) -> ResultSet:
        """Walk record nodes, extract fields, and collect matches.

        Raises:
            NotLoadedError: If no load has completed.
            RecordValueError: If a matched-against numeric field is not a number.
        """
        if self._root is None:
            raise NotLoadedError(f"{self.name} parser has no loaded catalog")
        builder = ResultSetBuilder(self.schema)
        for ordinal, node in enumerate(self._root.iterchildren(self.schema.record), start=1):
            record = self._extract(node, ordinal)
            if record is not None and query.is_match(record):
                builder.add(record)
        result = builder.build()
        log.debug("Query matched %d records (%s)", result.count, self.name)
        return result

    def _extract(self, node: etree._Element, ordinal: int) -> Record | None:
        values: dict[str, str | None] = {}
        for spec in self.schema.fields:
            child = next(node.iterchildren(spec.element), None)
            values[spec.name] = element_text(child) if child is not None else None
        try:
            return build_record(self.schema, values, ordinal=ordinal)
        except MalformedRecordError as error:
            log.warning("Skipping record: %s", error)
            return None

    def close(self) -> None:
        self._root = None
