#!/usr/bin/env python3
"""Hydra Schema Builder - Entry point."""
import json
import logging
from pathlib import Path

import click
from colorama import Fore, Style, init

from config import app_config
from src.builder.graph_resolver import schemas_from_resources
from src.cli.reporter import print_header, print_issues, print_resource_summary
from src.exporter.json_exporter import JsonSchemaExporter
from src.introspection.resource_loader import ResourceLoader
from src.schema.context import ResourceReferenceError
from src.validator.data_validator import SchemaValidator

# Initialize colorama
init(autoreset=True)


def _load_resources(resources_file: str):
    try:
        return ResourceLoader().load_file(Path(resources_file))
    except ValueError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version="0.1.0")
@click.option("--log-level", default=None, help="Logging level (default from HYDRA_SCHEMA_LOG_LEVEL)")
def cli(log_level):
    """Hydra Schema Builder - Build and check schemas from API resource metadata."""
    logging.basicConfig(
        level=(log_level or app_config.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("resources_file", type=click.Path(exists=True, dir_okay=False))
def resources(resources_file):
    """List resources and their readable fields."""
    print_resource_summary(_load_resources(resources_file))


@cli.command()
@click.argument("resources_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: <output_dir>/schemas.json)",
)
def export(resources_file, output):
    """Export resource and collection schemas as JSON Schema."""
    schema_set = schemas_from_resources(
        _load_resources(resources_file),
        prefix=app_config.namespace_prefix,
    )
    output_file = Path(output) if output else Path(app_config.output_dir) / "schemas.json"

    JsonSchemaExporter().export(output_file, schema_set)
    click.echo(f"{Fore.GREEN}✅ Exported {len(schema_set.schemas)} schemas to {output_file}")


@cli.command()
@click.argument("resources_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("resource")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--collection", is_flag=True, help="Check DOCUMENT as a collection of RESOURCE")
def check(resources_file, resource, document, collection):
    """Check a JSON DOCUMENT against the schema of RESOURCE."""
    schema_set = schemas_from_resources(
        _load_resources(resources_file),
        prefix=app_config.namespace_prefix,
    )
    if resource not in schema_set:
        raise click.ClickException(
            f"Unknown resource {resource!r}. Available: {', '.join(schema_set.names())}"
        )

    try:
        with open(document, "r", encoding="utf-8") as f:
            value = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {document}: {e}")

    schema = schema_set.collections[resource] if collection else schema_set.schemas[resource]
    kind = "collection" if collection else "resource"

    try:
        result = SchemaValidator(schema, schema_set.context).safe_validate(value)
    except ResourceReferenceError as e:
        raise click.ClickException(str(e))

    if result.success:
        click.echo(f"{Fore.GREEN}✅ {document} is a valid {resource} {kind}{Style.RESET_ALL}")
        return

    print_header(f"{document}: {len(result.issues)} issue(s) against {resource} {kind}")
    print_issues(result.issues)
    raise SystemExit(1)


if __name__ == "__main__":
    cli()
