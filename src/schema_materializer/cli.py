"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from schema_materializer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    resolve_log_level,
    write_placeholder_configuration,
)
from schema_materializer.conversion_runs import (
    ConversionRequest,
    RunExecutionError,
    ValidationRequest,
    execute_payload_classification,
    execute_payload_conversion,
    execute_payload_validation,
    resolve_configuration,
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="jsonschema-materializer")
def cli() -> None:
    """Turn JSON schema documents embedded in payloads into validators."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration with the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="classify")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON/YAML value to score",
)
def classify(input_path: str) -> None:
    """Report whether a value looks like a JSON schema, and why."""
    try:
        report = execute_payload_classification(input_path)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        json.dumps(
            {
                "schema_like": report.is_schema_like,
                "score": report.score,
                "marker": report.marker,
                "signals": list(report.signals),
            },
            indent=2,
        )
    )


@cli.command(name="convert")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML payload to convert",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path to a YAML configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path for the converted payload in transit form",
)
def convert(input_path: str, config_path: str | None, output_path: str | None) -> None:
    """Materialize every schema-like value of a payload and list where they were."""
    _configure_logging(config_path)
    try:
        outcome = execute_payload_conversion(
            ConversionRequest(
                input_path=input_path,
                config_path=config_path,
                output_path=output_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for location in outcome.locations:
        click.echo(f"{location.path}\t{location.label}")
    if outcome.output_path is not None:
        click.echo(str(outcome.output_path))


@cli.command(name="validate")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML schema document",
)
@click.option(
    "--data",
    "data_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML data to validate",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path to a YAML configuration file",
)
def validate(schema_path: str, data_path: str, config_path: str | None) -> None:
    """Validate data against a schema and print the parsed result."""
    _configure_logging(config_path)
    try:
        outcome = execute_payload_validation(
            ValidationRequest(schema_path=schema_path, data_path=data_path, config_path=config_path)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    if not outcome.success:
        raise CliError("\n".join(("Validation failed:", *outcome.errors)))
    click.echo(json.dumps(outcome.data, indent=outcome.indent, ensure_ascii=False))


def _configure_logging(config_path: str | None) -> None:
    try:
        configuration = resolve_configuration(config_path)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    logging.basicConfig(
        level=resolve_log_level(configuration.logging),
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
