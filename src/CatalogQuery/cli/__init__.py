"""CLI package for CatalogQuery command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from CatalogQuery.cli.runner import CommandRunner
from CatalogQuery.cli.ui import cli


def main() -> None:
    """Run CatalogQuery CLI.

    Entry point referenced by the console script in pyproject.toml.
    """
    cli()
