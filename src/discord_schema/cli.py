"""CLI entry point for discord-schema."""

import logging
from pathlib import Path

import click

from discord_schema.config import load_config
from discord_schema.errors import SchemaBuildError
from discord_schema.generator.schema import (
    SCHEMA_FORMATS,
    build_schema,
    dump_schema,
    load_documents,
    read_documents,
)
from discord_schema.parser.base import Endpoint


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _write_schema(endpoints: list[Endpoint], output: Path, fmt: str) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_schema(endpoints, fmt), encoding="utf-8")
    click.echo(f"Schema with {len(endpoints)} endpoints saved to {output}")


@click.group()
def main():
    """Discord Schema: build an endpoint schema from the Discord API docs."""
    pass


@main.command()
@click.option("-o", "--output", default="output/schema.json", type=click.Path(path_type=Path), help="Output file path for the schema.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML file overriding the default pages.")
@click.option("--format", "fmt", default="json", type=click.Choice(SCHEMA_FORMATS), help="Schema file format.")
@click.option("--namespace", "namespaces", multiple=True, help="Only read this namespace (repeatable).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def build(output: Path, config_path: Path | None, fmt: str, namespaces: tuple[str, ...], verbose: bool):
    """Fetch the documentation pages and build the schema."""
    _setup_logging(verbose)
    try:
        config = load_config(config_path).select(namespaces)
        click.echo(f"Requesting API docs for {len(config.pages)} namespaces...")
        documents = load_documents(config.pages)
        endpoints = build_schema(documents, config)
    except SchemaBuildError as e:
        raise click.ClickException(str(e)) from e

    _write_schema(endpoints, output, fmt)


@main.command()
@click.argument("doc_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default="output/schema.json", type=click.Path(path_type=Path), help="Output file path for the schema.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML file overriding the default settings.")
@click.option("--format", "fmt", default="json", type=click.Choice(SCHEMA_FORMATS), help="Schema file format.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def parse(doc_paths: tuple[Path, ...], output: Path, config_path: Path | None, fmt: str, verbose: bool):
    """Build the schema from local Markdown files (namespace = file name)."""
    _setup_logging(verbose)
    click.echo(f"Parsing {len(doc_paths)} documents...")
    try:
        config = load_config(config_path)
        endpoints = build_schema(read_documents(list(doc_paths)), config)
    except SchemaBuildError as e:
        raise click.ClickException(str(e)) from e

    _write_schema(endpoints, output, fmt)
