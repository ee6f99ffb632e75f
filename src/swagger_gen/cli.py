"""CLI entry point for swagger-gen."""

import importlib
import logging
import sys
from pathlib import Path

import click

from swagger_gen.errors import SwaggerGenError
from swagger_gen.generator.swagger_generator import SwaggerGenerator
from swagger_gen.serializer import detect_format, dump

logger = logging.getLogger(__name__)


def _load_generator(app_spec: str, app_dir: str) -> SwaggerGenerator:
    """Import ``module:attribute`` and return the generator it names."""
    module_name, _, attribute = app_spec.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"expected 'module:attribute', got '{app_spec}'", param_hint="APP_SPEC")

    if app_dir and app_dir not in sys.path:
        sys.path.insert(0, app_dir)

    try:
        target = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"could not load '{app_spec}': {e}", param_hint="APP_SPEC") from e

    # Accept a zero-argument factory as well as the generator itself
    if not hasattr(target, "get_swagger") and callable(target):
        target = target()
    if not hasattr(target, "get_swagger"):
        raise click.BadParameter(f"'{app_spec}' is not a Swagger generator", param_hint="APP_SPEC")

    logger.debug("Loaded generator from %s", app_spec)
    return target


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="SWAGGER_GEN_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def main(log_level: str):
    """swagger-gen: build Swagger 2.0 documents from route and type metadata."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("app_spec")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the document.")
@click.option("--doc", "document_name", default="v1", envvar="SWAGGER_GEN_DOC", show_default=True, help="Registered document name.")
@click.option("--host", default=None, envvar="SWAGGER_GEN_HOST", help="Host to advertise, e.g. api.example.com.")
@click.option("--base-path", default=None, envvar="SWAGGER_GEN_BASE_PATH", help="Base path to advertise, e.g. /api.")
@click.option("--scheme", "schemes", multiple=True, type=click.Choice(["http", "https", "ws", "wss"]), help="Transfer scheme (repeatable).")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
@click.option("--app-dir", default=".", envvar="SWAGGER_GEN_APP_DIR", show_default=True, help="Directory to import APP_SPEC from.")
def generate(
    app_spec: str,
    output: Path,
    document_name: str,
    host: str | None,
    base_path: str | None,
    schemes: tuple[str, ...],
    fmt: str,
    app_dir: str,
):
    """Generate a Swagger document from APP_SPEC (module:attribute)."""
    generator = _load_generator(app_spec, app_dir)

    click.echo(f"Generating document '{document_name}' from {app_spec}...")
    try:
        document = generator.get_swagger(
            document_name,
            host=host,
            base_path=base_path,
            schemes=list(schemes) or None,
        )
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(document.paths)} paths and {len(document.definitions)} definitions.")

    if fmt == "auto":
        fmt = detect_format(output)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump(document, fmt), encoding="utf-8")
    click.echo(f"Document saved to {output}")


@main.command()
@click.argument("app_spec")
@click.option("--app-dir", default=".", envvar="SWAGGER_GEN_APP_DIR", show_default=True, help="Directory to import APP_SPEC from.")
def docs(app_spec: str, app_dir: str):
    """List the documents registered on APP_SPEC."""
    generator = _load_generator(app_spec, app_dir)
    for name, info in generator.settings.swagger_docs.items():
        click.echo(f"{name}\t{info.title} {info.version}")
