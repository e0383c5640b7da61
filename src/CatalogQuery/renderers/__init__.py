"""Output renderers for query results.

Exports the OutputWriter base for new output formats and a factory that
instantiates writers from configuration.
"""

from __future__ import annotations

from CatalogQuery.config import AppConfig
from CatalogQuery.renderers.base import MultiOutputWriter, OutputWriter
from CatalogQuery.renderers.console import ConsoleOutputWriter, render_text
from CatalogQuery.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        A MultiOutputWriter over every configured format.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
