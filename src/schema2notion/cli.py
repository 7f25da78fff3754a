"""CLI for schema2notion.

Works offline on JSON exports: a data source object (or its ``properties``
mapping) as returned by the Notion API, and local schemas as JSON objects
mapping keys to field definitions.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from schema2notion import __version__
from schema2notion.config import Settings, get_settings
from schema2notion.exceptions import ConfigurationError, Schema2NotionError
from schema2notion.models import Schema, diffs_adapter, schema_adapter
from schema2notion.notion.changes import apply_schema_changes
from schema2notion.notion.diff import diff_schema
from schema2notion.notion.filters import build_upsert_filter
from schema2notion.notion.schema import infer_schema

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e


def _read_properties(path: Path) -> tuple[dict[str, dict], str | None]:
    """Read a data source export; returns (properties, data source id)."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    if isinstance(data.get("properties"), dict):
        return data["properties"], data.get("id")
    return data, None


def _read_schema(path: Path) -> Schema:
    try:
        return schema_adapter.validate_python(_read_json(path))
    except ValidationError as e:
        raise ConfigurationError(f"{path} is not a valid schema:\n{e}") from e


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _settings(ctx: click.Context) -> Settings:
    settings: Settings | None = ctx.obj.get("settings")
    if settings is None:
        click.echo(f"Error loading settings: {ctx.obj.get('settings_error')}", err=True)
        ctx.exit(1)
    return settings


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context) -> None:
    """Plan Notion data source schema changes from local schemas."""
    ctx.ensure_object(dict)

    # Load settings
    try:
        settings = get_settings()
        ctx.obj["settings"] = settings
    except ValidationError as e:
        ctx.obj["settings_error"] = str(e)
        return

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.argument("properties_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--data-source-id", help="Restore formula references to this data source")
@click.pass_context
def infer(ctx: click.Context, properties_file: Path, data_source_id: str | None) -> None:
    """Infer a local schema from a data source export."""
    settings = _settings(ctx)
    try:
        properties, exported_id = _read_properties(properties_file)
        schema = infer_schema(properties, data_source_id or exported_id or settings.data_source_id)
    except Schema2NotionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    _echo_json(schema_adapter.dump_python(schema, mode="json", exclude_none=True))


@main.command()
@click.argument("properties_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def diff(ctx: click.Context, properties_file: Path, schema_file: Path) -> None:
    """Show the changes between a data source export and a local schema."""
    settings = _settings(ctx)
    try:
        properties, exported_id = _read_properties(properties_file)
        remote_schema = infer_schema(properties, exported_id or settings.data_source_id)
        diffs = diff_schema(remote_schema, _read_schema(schema_file))
    except Schema2NotionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not diffs:
        click.echo("Schema is up to date.")
        return
    _echo_json(diffs_adapter.dump_python(diffs, mode="json", exclude_none=True))


@main.command()
@click.argument("properties_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strategy",
    type=click.Choice(["merge", "overwrite", "strict"]),
    help="How to treat remote-only properties (default: CONFLICT_STRATEGY or merge)",
)
@click.pass_context
def plan(
    ctx: click.Context, properties_file: Path, schema_file: Path, strategy: str | None
) -> None:
    """Print the property update payload that syncs a data source to a schema."""
    settings = _settings(ctx)
    strategy = strategy or settings.conflict_strategy
    try:
        properties, exported_id = _read_properties(properties_file)
        remote_schema = infer_schema(properties, exported_id or settings.data_source_id)
        local_schema = _read_schema(schema_file)
        updates = apply_schema_changes(
            local_schema, diff_schema(remote_schema, local_schema), strategy
        )
    except Schema2NotionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    _echo_json({"properties": updates})


@main.command("filter")
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-u", "--unique", "unique_keys", multiple=True, required=True,
              help="Schema key that identifies the record (repeatable)")
@click.pass_context
def filter_(
    ctx: click.Context, schema_file: Path, record_file: Path, unique_keys: tuple[str, ...]
) -> None:
    """Print the query filter that finds an existing record for an upsert."""
    _settings(ctx)
    try:
        record = _read_json(record_file)
        if not isinstance(record, dict):
            raise ConfigurationError(f"{record_file} must contain a JSON object")
        query_filter = build_upsert_filter(_read_schema(schema_file), unique_keys, record)
    except Schema2NotionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    _echo_json({"filter": query_filter})


if __name__ == "__main__":
    main()
