"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, session cleanup, and
error handling for command execution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from CatalogQuery.cli.commands import QueryCommand
from CatalogQuery.config import AppConfig
from CatalogQuery.core.query import SavedQuery
from CatalogQuery.renderers import create_output_writer
from CatalogQuery.services import create_session
from CatalogQuery.transform.xslt import transform_catalog
from CatalogQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_query(
        self,
        action: str,
        *,
        source: Path | None = None,
        parser_name: str | None = None,
        queries: Sequence[SavedQuery] | None = None,
    ) -> None:
        """Execute saved or ad-hoc queries with full resource management.

        Args:
            action: The CLI command name (e.g. 'query').
            source: Optional catalog path overriding the config.
            parser_name: Optional parser variant overriding the config.
            queries: Ad-hoc queries replacing the configured ones.

        Raises:
            click.Abort: When loading or querying fails.
        """
        self._configure_logging(action)
        try:
            output_writer = create_output_writer(self.config)
            with create_session(self.config, source=source, parser_name=parser_name) as session:
                command = QueryCommand(
                    session=session,
                    queries=queries if queries is not None else self.config.query.queries,
                    output_writer=output_writer,
                )
                command.execute()
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Query failed: %s", e)
            raise click.Abort from e

    def run_transform(
        self,
        action: str,
        *,
        source: Path | None = None,
        stylesheet: Path | None = None,
        target: Path | None = None,
    ) -> Path:
        """Apply the configured stylesheet to the catalog.

        Raises:
            click.Abort: When the transform fails.
        """
        self._configure_logging(action)
        try:
            return transform_catalog(
                source or Path(self.config.catalog.source),
                stylesheet or Path(self.config.transform.stylesheet),
                target or Path(self.config.transform.target),
            )
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Transform failed: %s", e)
            raise click.Abort from e
