"""Query session: the explicit context a caller threads through filter edits and queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from CatalogQuery.core.filter import Filter
from CatalogQuery.core.models import CatalogSchema, ResultSet
from CatalogQuery.parsers.base import CatalogParser
from CatalogQuery.parsers.registry import build_parser
from CatalogQuery.utils.log import log


@dataclass(slots=True)
class QuerySession:
    """One active query session over a catalog source.

    Owns the current `Filter` and the active parser. Calls are expected to be
    serialized; the streaming parser in particular must not be queried
    concurrently.
    """

    schema: CatalogSchema
    source: Path
    parser: CatalogParser
    filter: Filter = field(init=False)

    def __post_init__(self) -> None:
        self.filter = Filter(self.schema)

    @classmethod
    def open(cls, schema: CatalogSchema, source: Path, parser_name: str) -> QuerySession:
        """Build the named parser, load the source, and start a session.

        Raises:
            ValueError: If the parser name is not registered.
            LoadError: If the source cannot be loaded.
        """
        parser = build_parser(parser_name, schema=schema)
        parser.load(source)
        return cls(schema=schema, source=source, parser=parser)

    def set_field(self, name: str, raw_value: str | None) -> None:
        self.filter.set_field(name, raw_value)

    def apply(self, settings: dict[str, str]) -> None:
        """Set several filter fields at once, in the given order."""
        for name, raw_value in settings.items():
            self.filter.set_field(name, raw_value)

    def reset(self) -> None:
        """Replace the filter with a fresh unconstrained one."""
        self.filter = Filter(self.schema)

    def reload(self) -> None:
        """Re-read the source into the active parser.

        This is also how a drained streaming cursor is re-armed.
        """
        self.parser.load(self.source)

    def switch_parser(self, parser_name: str) -> None:
        """Load the source with another parser variant and make it active.

        The current parser stays active if the new one fails to load.
        """
        parser = build_parser(parser_name, schema=self.schema)
        parser.load(self.source)
        self.parser.close()
        self.parser = parser
        log.info("Switched parser to %s", parser.name)

    def run(self) -> ResultSet:
        """Run the current filter against the active parser."""
        log.debug("Running query parser=%s filter=%s", self.parser.name, self.filter.as_dict())
        return self.parser.filter_by(self.filter)

    def close(self) -> None:
        self.parser.close()

    def __enter__(self) -> QuerySession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
