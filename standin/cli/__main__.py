"""Standin CLI - Main Entry Point.

Commands:
    fixtures - Load fixture files into a fresh store and summarize them
    get      - Answer a GET request from fixture data with a shorthand
"""

import json
import sys
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import click

from standin import __version__
from standin.config import ConfigError, ConfigLoader, StandinConfig, configure_logging
from standin.db import Db, load_fixtures
from standin.faults import Fault
from standin.shorthands import GetShorthand, ShorthandRequest

from . import __cli_name__
from .output import error, kv, success


def _load_config(config_file: Optional[str]) -> StandinConfig:
    loader = ConfigLoader.load(config_file)
    return loader.get_config()


def _load_db(path: Optional[str], config: StandinConfig) -> Db:
    path = path or config.fixtures_path
    if not path:
        raise click.UsageError("No fixture path given and none configured (fixtures_path)")

    db = Db(strict=config.strict_collections)
    load_fixtures(db, path)
    return db


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="JSON or YAML settings file")
@click.pass_context
def cli(ctx, config_file: Optional[str]):
    """In-memory data layer for testing API clients."""
    ctx.ensure_object(dict)
    try:
        config = _load_config(config_file)
    except ConfigError as e:
        error(f"Invalid configuration: {e}")
        sys.exit(1)
    configure_logging(config.log_level)
    ctx.obj["config"] = config


# ============================================================================
# Commands
# ============================================================================

@cli.command("fixtures")
@click.argument("path", required=False, type=click.Path(exists=True))
@click.option("--dump", is_flag=True, help="Print every record as JSON")
@click.pass_context
def fixtures_cmd(ctx, path: Optional[str], dump: bool):
    """
    Load fixtures into a fresh store.

    Examples:
      standin fixtures fixtures/
      standin fixtures fixtures/users.yaml --dump
    """
    try:
        db = _load_db(path, ctx.obj["config"])
    except Fault as e:
        error(f"Failed to load fixtures: {e}")
        sys.exit(1)

    if dump:
        click.echo(json.dumps(db.dump(), indent=2, default=str))
        return

    success(f"Loaded {len(db.collection_names)} collections")
    for name in db.collection_names:
        kv(name, str(len(db.collection(name))))


@cli.command("get")
@click.argument("path", type=click.Path(exists=True))
@click.argument("url")
@click.option("--key", "keys", multiple=True,
              help="Shorthand key; repeat for several. Inferred from the URL when omitted")
@click.option("--id", "record_id", help="Value of the :id route parameter")
@click.option("--coalesce", is_flag=True, help="Honor ?ids= on collection routes")
@click.pass_context
def get_cmd(ctx, path: str, url: str, keys: Tuple[str, ...], record_id: Optional[str], coalesce: bool):
    """
    Answer a GET request from fixture data.

    Examples:
      standin get fixtures/ /contacts
      standin get fixtures/ /contacts/1 --id 1
      standin get fixtures/ /contacts/1 --id 1 --key contact --key addresses
      standin get fixtures/ "/contacts?ids=1,2" --coalesce
    """
    try:
        db = _load_db(path, ctx.obj["config"])
    except Fault as e:
        error(f"Failed to load fixtures: {e}")
        sys.exit(1)

    if not keys:
        spec = None
    elif len(keys) == 1:
        spec = keys[0]
    else:
        spec = list(keys)

    query = {name: values[0] for name, values in parse_qs(urlsplit(url).query).items()}
    params = {"id": record_id} if record_id is not None else {}

    handler = GetShorthand(spec, coalesce=coalesce)
    try:
        payload = handler.handle(db, ShorthandRequest(url, params=params, query_params=query))
    except ValueError as e:
        error(str(e))
        sys.exit(1)

    click.echo(json.dumps(payload, indent=2, default=str))


def main():
    """Entry point for `standin` command."""
    cli(obj={})


if __name__ == "__main__":
    main()
