"""Command implementations for the CatalogQuery CLI.

Encapsulates the query loop, separated from CLI parameter handling and output
formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from CatalogQuery.core.query import SavedQuery
from CatalogQuery.renderers import OutputWriter
from CatalogQuery.services import QuerySession
from CatalogQuery.utils.log import log


@dataclass(slots=True)
class QueryCommand:
    """Run saved queries against one session and hand results to the writer."""

    session: QuerySession
    queries: Sequence[SavedQuery]
    output_writer: OutputWriter

    def execute(self) -> None:
        """Execute every query with a fresh filter.

        Queries after the first re-read the source first, which re-arms the
        single-pass streaming cursor and is a plain refresh for the others.
        """
        multiple = len(self.queries) > 1
        for idx, query in enumerate(self.queries, start=1):
            if idx > 1:
                self.session.reload()
            if multiple:
                log.info("=== Query %d/%d ===", idx, len(self.queries))
            if query.name:
                log.info("name=%s", query.name)
            log.info("filter=%s", dict(query.settings))

            self.session.reset()
            self.session.apply(dict(query.settings))
            result = self.session.run()
            log.debug("Query %d produced %d entries", idx, result.count)

            self.output_writer.write_query_result(result, query, self.session.parser.name)
