"""Base classes for output writers.

Separates query control flow from how result sets are presented.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from CatalogQuery.core.models import ResultSet
from CatalogQuery.core.query import SavedQuery


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_query_result(self, result: ResultSet, query: SavedQuery, parser_name: str) -> None:
        """Write the result of a single saved query.

        Args:
            result: Result set returned by the parser.
            query: The saved query that produced it.
            parser_name: Parser variant that ran the query.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g. write accumulated results to file).

        Args:
            action: The CLI command name (e.g. 'query').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_query_result(self, result: ResultSet, query: SavedQuery, parser_name: str) -> None:
        for writer in self.writers:
            writer.write_query_result(result, query, parser_name)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
