"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from OshiViewer.cli.runner import CommandRunner
from OshiViewer.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults
from OshiViewer.search.facets import BrowseFilters
from OshiViewer.search.fields import REGISTRY
from OshiViewer.search.parser import is_empty_query, parse_query, summarize_query


@click.group(help="OshiViewer: browse and query the sword catalog.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config. A
    user config is merged over the defaults when the default file exists.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    if DEFAULT_CONFIG_PATH.is_file():
        cfg = load_config_with_defaults(config_path)
    else:
        cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("browse")
@click.option("--query", "-q", default=None, help="Query string, e.g. 'Soshu nagasa>70 -wakizashi'.")
@click.option("--collection", default=None, help="Tokuju or Juyo.")
@click.option("--volume", type=int, default=None, help="Volume (session) number.")
@click.option("--item-type", default=None, help="token, tosogu or koshirae.")
@click.option("--era", default=None)
@click.option("--school", default=None)
@click.option("--tradition", default=None)
@click.option("--blade-type", default=None)
@click.option("--smith", default=None)
@click.option("--mei-status", default=None)
@click.option("--nakago-condition", default=None)
@click.option("--denrai", default=None, help="Provenance owner.")
@click.option("--kiwame", default=None, help="Attributing appraiser.")
@click.option("--ensemble", "is_ensemble", is_flag=True, default=None, help="Only sets and unified mountings.")
@click.option("--translated/--untranslated", "has_translation", default=None)
@click.pass_context
def browse_cmd(ctx: click.Context, **options: object) -> None:
    """Filter the catalog and print matching items with facet counts.

    Raises:
        click.Abort: When the browse fails.
    """
    # The ensemble filter is only ever "on"; off means inactive.
    if not options.get("is_ensemble"):
        options["is_ensemble"] = None
    filters = BrowseFilters(**options)
    CommandRunner(ctx.obj).run_browse(action=ctx.command.name, filters=filters)


@cli.command("explain")
@click.argument("query")
def explain_cmd(query: str) -> None:
    """Show how a query string is parsed, with diagnostics."""
    parsed = parse_query(query)
    click.echo(summarize_query(parsed))
    if is_empty_query(parsed):
        click.echo("(matches every item)")
    for diagnostic in parsed.diagnostics:
        click.echo(f"[{diagnostic.severity}] {diagnostic.code}: {diagnostic.message} ({diagnostic.raw})")


@cli.command("fields")
def fields_cmd() -> None:
    """List searchable fields, their aliases and types."""
    for definition in REGISTRY.definitions:
        aliases = ", ".join(definition.aliases) or "-"
        click.echo(f"{definition.name:<15} {definition.type:<8} {aliases}")
        click.echo(f"    {definition.description}")
        if definition.examples:
            click.echo(f"    e.g. {'  '.join(definition.examples)}")
