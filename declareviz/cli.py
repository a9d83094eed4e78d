"""Command-line interface for declareviz."""

import logging
import sys

import click

from .graph.builder import assemble_elements, build_element_graph
from .graph.constraint_map import map_constraint
from .layout.config import LayoutConfig, load_config
from .output.export import (
    DEFAULT_IMAGE_FILENAME,
    DEFAULT_MODEL_FILENAME,
    write_elements_json,
    write_model_json,
    write_png,
)
from .output.formatter import (
    format_edges,
    format_elements,
    format_render_summary,
    format_validation_result,
)
from .render.styles import StyleRegistry, load_styles
from .schema.errors import SchemaLoadError, SchemaValidationError
from .schema.loader import parse_model
from .session import VisualizationSession
from .validators.runner import run_checks

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)


def _load_or_exit(loader, path: str, what: str):
    """Run a loader, turning load and schema errors into exit code 2."""
    try:
        return loader(path)
    except SchemaLoadError as e:
        click.echo(f"Error loading {what}: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        click.echo(f"Schema validation error in {what}: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(package_name="declareviz")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
def main(verbose: int):
    """declareviz: render Declare process models as graphs."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    default=DEFAULT_IMAGE_FILENAME,
    show_default=True,
    help="PNG file to write",
)
@click.option(
    "--json-output",
    default=None,
    help="Also write the positioned elements as JSON",
)
@click.option(
    "--config",
    "config_file",
    envvar="DECLAREVIZ_CONFIG",
    type=click.Path(exists=True),
    help="YAML/JSON layout config (defaults to DECLAREVIZ_CONFIG env var)",
)
@click.option(
    "--styles",
    "styles_file",
    envvar="DECLAREVIZ_STYLES",
    type=click.Path(exists=True),
    help="YAML/JSON style overrides (defaults to DECLAREVIZ_STYLES env var)",
)
@click.option(
    "--time-budget",
    type=click.FloatRange(min=0),
    default=None,
    help="Layout wall-clock budget in seconds",
)
@click.option(
    "--scale",
    type=click.FloatRange(min=0, min_open=True),
    default=1.0,
    show_default=True,
    help="PNG scale",
)
@FORMAT_OPTION
def render(
    model_file: str,
    output: str,
    json_output: str | None,
    config_file: str | None,
    styles_file: str | None,
    time_budget: float | None,
    scale: float,
    output_format: str,
):
    """Lay out a model and write it as a PNG image.

    MODEL_FILE is the path to a JSON or YAML Declare model.

    Exit codes:
      0 - Rendered
      2 - File, schema or config error
    """
    model = _load_or_exit(parse_model, model_file, "model")

    config = LayoutConfig()
    if config_file:
        config = _load_or_exit(load_config, config_file, "config")
    if time_budget is not None:
        config = config.model_copy(update={"max_simulation_time": time_budget})

    styles = StyleRegistry()
    if styles_file:
        styles = _load_or_exit(load_styles, styles_file, "styles")

    with VisualizationSession(config=config, styles=styles) as session:
        surface = session.render(model)
        write_png(surface, output, scale=scale)
        if json_output:
            write_elements_json(surface, json_output)

        click.echo(format_render_summary(surface, output_format))  # type: ignore
        if output_format == "text":
            click.echo(f"Wrote {output}")
    sys.exit(0)


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@FORMAT_OPTION
def elements(model_file: str, output_format: str):
    """Print the graph elements assembled for a model, without layout.

    MODEL_FILE is the path to a JSON or YAML Declare model.
    """
    model = _load_or_exit(parse_model, model_file, "model")
    click.echo(format_elements(assemble_elements(model), output_format))  # type: ignore


@main.command()
@click.argument("kind")
@click.argument("source")
@click.argument("target")
@click.option("--index", type=int, default=0, show_default=True, help="Constraint index")
@FORMAT_OPTION
def edges(kind: str, source: str, target: str, index: int, output_format: str):
    """Show the edges drawn for one constraint.

    KIND is a constraint kind such as "chain response"; SOURCE and TARGET
    are activity ids.
    """
    click.echo(format_edges(map_constraint(kind, source, target, index), output_format))  # type: ignore


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@FORMAT_OPTION
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def check(model_file: str, output_format: str, strict: bool):
    """Lint a model for dangling references and unknown kinds.

    MODEL_FILE is the path to a JSON or YAML Declare model.

    Exit codes:
      0 - Check passed
      1 - Errors found (or warnings, with --strict)
      2 - File or schema error
    """
    model = _load_or_exit(parse_model, model_file, "model")
    result = run_checks(model, build_element_graph(model))

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command("export-json")
@click.argument("model_file", type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    default=DEFAULT_MODEL_FILENAME,
    show_default=True,
    help="JSON file to write",
)
def export_json(model_file: str, output: str):
    """Write a model back out as normalized JSON.

    MODEL_FILE is the path to a JSON or YAML Declare model.
    """
    model = _load_or_exit(parse_model, model_file, "model")
    path = write_model_json(model, output)
    click.echo(f"Wrote {path}")


if __name__ == "__main__":
    main()
