"""Streaming forward-only parser variant.

`load` opens the source and primes an lxml ``iterparse`` cursor; the cursor is
the whole representation. `filter_by` drains it exactly once, so a second call
without a fresh `load` sees an exhausted cursor and returns an empty result.

Consumption states: outside a record, inside a record collecting field text,
and record close, where the completed record is matched and emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Iterator

from lxml import etree

from CatalogQuery.core.errors import LoadError, MalformedRecordError, NotLoadedError
from CatalogQuery.core.filter import Filter
from CatalogQuery.core.models import CatalogSchema, ResultSet, build_record
from CatalogQuery.parsers.base import ENTITY_POLICY, ResultSetBuilder, SourcePath, check_root, element_text
from CatalogQuery.utils.log import log

_EVENTS = ("start", "end")

# depth counted from the root element (1) down to field elements (3)
_RECORD_DEPTH = 2
_FIELD_DEPTH = 3


@dataclass(slots=True)
class StreamingParser:
    """`CatalogParser` that keeps only an open forward-only event cursor."""

    schema: CatalogSchema
    name: str = "streaming"
    _source: str = field(default="", init=False, repr=False)
    _handle: IO[bytes] | None = field(default=None, init=False, repr=False)
    _events: Iterator[tuple[str, etree._Element]] | None = field(default=None, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def load(self, source: SourcePath) -> None:
        """Open a fresh cursor over the source, closing any previous one.

        Only the root element is read here; syntax errors further into the
        document surface from `filter_by`.

        Raises:
            LoadError: If the source cannot be opened, is not markup, or has the wrong root.
        """
        path = str(source)
        try:
            handle = open(path, "rb")  # noqa: SIM115 - owned by the cursor until released
        except OSError as error:
            raise LoadError(path, str(error)) from error

        events = etree.iterparse(handle, events=_EVENTS, resolve_entities=ENTITY_POLICY, no_network=True)
        try:
            _, root = next(events)
            check_root(path, root, self.schema)
        except etree.XMLSyntaxError as error:
            handle.close()
            raise LoadError(path, str(error)) from error
        except StopIteration as error:
            handle.close()
            raise LoadError(path, "document has no root element") from error
        except LoadError:
            handle.close()
            raise

        self._release()
        self._source = path
        self._handle = handle
        self._events = events
        self._loaded = True
        log.info("Opened streaming cursor over %s (%s)", path, self.name)

    def filter_by(self, query: Filter) -> ResultSet:
        """Drain the cursor once, matching each record as it closes.

        Raises:
            NotLoadedError: If no load has completed.
            LoadError: If the document turns out not to be well-formed.
            RecordValueError: If a matched-against numeric field is not a number.
        """
        if not self._loaded:
            raise NotLoadedError(f"{self.name} parser has no loaded catalog")
        builder = ResultSetBuilder(self.schema)
        if self._events is None:
            log.debug("Cursor over %s already exhausted (%s)", self._source, self.name)
            return builder.build()

        fields = self.schema.by_element()
        depth = 1
        ordinal = 0
        values: dict[str, str | None] | None = None
        try:
            for event, element in self._events:
                if event == "start":
                    depth += 1
                    if depth == _RECORD_DEPTH and element.tag == self.schema.record:
                        ordinal += 1
                        values = {}
                    continue

                depth -= 1
                if values is None:
                    continue
                if depth == _FIELD_DEPTH - 1:
                    spec = fields.get(element.tag)
                    if spec is not None and spec.name not in values:
                        values[spec.name] = element_text(element)
                elif depth == _RECORD_DEPTH - 1:
                    try:
                        record = build_record(self.schema, values, ordinal=ordinal)
                    except MalformedRecordError as error:
                        log.warning("Skipping record: %s", error)
                    else:
                        if query.is_match(record):
                            builder.add(record)
                    values = None
                    _discard(element)
        except etree.XMLSyntaxError as error:
            raise LoadError(self._source, str(error)) from error
        finally:
            self._release()

        result = builder.build()
        log.debug("Query matched %d records (%s)", result.count, self.name)
        return result

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._events = None

    def close(self) -> None:
        self._release()
        self._loaded = False


def _discard(element: etree._Element) -> None:
    """Free a processed record and its already-processed siblings."""
    element.clear(keep_tail=True)
    parent = element.getparent()
    if parent is None:
        return
    while element.getprevious() is not None:
        del parent[0]
