"""CLI entry point for route-swagger."""

import logging
from pathlib import Path

import click

from route_swagger.config import load_config
from route_swagger.errors import RouteSwaggerError
from route_swagger.generator.document import DocumentBuilder
from route_swagger.generator.output import FORMATS, dump_document
from route_swagger.parser.manifest import load_manifest


@click.group()
def main():
    """Route Swagger: generate Swagger docs from an application's route table."""
    pass


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML configuration file.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (stdout if omitted).")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Output format.")
@click.option("--filter", "route_filter", default=None, help="Only document routes starting with this prefix.")
@click.option("--preset", default=None, help="Configuration preset to use.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def generate(manifest_path: Path, config_path: Path | None, output: Path | None, fmt: str,
             route_filter: str | None, preset: str | None, verbose: bool):
    """Generate a Swagger document from a route manifest."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path, route_filter=route_filter, preset=preset)
        routes, models = load_manifest(manifest_path)
        document = DocumentBuilder(config, routes, models).generate()
    except RouteSwaggerError as e:
        raise click.ClickException(str(e)) from e

    text = dump_document(document, fmt)
    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Documented {len(document['paths'])} paths, saved to {output}", err=True)
