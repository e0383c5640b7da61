"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from CatalogQuery.cli.runner import CommandRunner
from CatalogQuery.config import AppConfig, load_config
from CatalogQuery.core.errors import UnknownFieldError
from CatalogQuery.core.filter import Filter
from CatalogQuery.core.query import SavedQuery
from CatalogQuery.parsers.registry import supported_parser_names


@click.group(help="CatalogQuery: filter an XML catalog and list matching records.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading the config,
    so ``catalog.source_env`` can point at them.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("query")
@click.option(
    "--parser",
    "parser_name",
    type=click.Choice(supported_parser_names(), case_sensitive=False),
    default=None,
    help="Parser variant; defaults to query.parser from the config.",
)
@click.option(
    "--source",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Catalog file; defaults to catalog.source from the config.",
)
@click.option(
    "--set",
    "settings",
    multiple=True,
    metavar="KEY=VALUE",
    help="Ad-hoc filter input (repeatable). Replaces the saved queries.",
)
@click.pass_context
def query_cmd(
    ctx: click.Context,
    parser_name: str | None,
    source: Path | None,
    settings: tuple[str, ...],
) -> None:
    """Run saved queries (or one ad-hoc query) and print the matches.

    Raises:
        click.Abort: When loading or querying fails.
    """
    cfg: AppConfig = ctx.obj
    queries = [SavedQuery(name=None, settings=_parse_settings(cfg, settings))] if settings else None
    runner = CommandRunner(cfg)
    runner.run_query(ctx.command.name, source=source, parser_name=parser_name, queries=queries)


@cli.command("fields")
@click.pass_context
def fields_cmd(ctx: click.Context) -> None:
    """List the filter keys accepted by --set and saved queries."""
    cfg: AppConfig = ctx.obj
    probe = Filter(cfg.catalog.schema)
    browsable = {spec.name for spec in cfg.catalog.schema.browsable_fields}
    for key in probe.keys:
        suffix = "  (suggestions)" if key in browsable else ""
        click.echo(f"{key:<16}{probe.kind_of(key).value}{suffix}")


@cli.command("transform")
@click.option("--source", type=click.Path(path_type=Path, dir_okay=False), default=None)
@click.option("--stylesheet", type=click.Path(path_type=Path, dir_okay=False), default=None)
@click.option("--target", type=click.Path(path_type=Path, dir_okay=False), default=None)
@click.pass_context
def transform_cmd(
    ctx: click.Context,
    source: Path | None,
    stylesheet: Path | None,
    target: Path | None,
) -> None:
    """Render the catalog through the XSLT stylesheet (e.g. into HTML)."""
    runner = CommandRunner(ctx.obj)
    written = runner.run_transform(ctx.command.name, source=source, stylesheet=stylesheet, target=target)
    click.echo(str(written))


def _parse_settings(cfg: AppConfig, settings: tuple[str, ...]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs, rejecting keys the schema does not know."""
    probe = Filter(cfg.catalog.schema)
    parsed: dict[str, str] = {}
    for item in settings:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--set")
        try:
            probe.kind_of(key)
        except UnknownFieldError as error:
            raise click.BadParameter(str(error), param_hint="--set") from error
        parsed[key.strip()] = value
    return parsed
