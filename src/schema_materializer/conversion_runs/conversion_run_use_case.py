"""Conversion run use-case services."""

from __future__ import annotations

import logging
from pathlib import Path

from schema_materializer.configuration import (
    Configuration,
    ConfigurationError,
    default_configuration,
    load_configuration,
)
from schema_materializer.payload_io import PayloadError, load_payload, write_payload
from schema_materializer.recursive_conversion import (
    ConversionError,
    find_validators,
    unsafe_recursive_json_schema_to_validator,
)
from schema_materializer.schema_classification import (
    SchemaLikenessReport,
    explain_json_schema_likeness,
)
from schema_materializer.schema_materialization import (
    MaterializationError,
    unsafe_json_schema_to_validator,
)

from .run_contracts import (
    ConversionOutcome,
    ConversionRequest,
    MaterializedLocation,
    ValidationOutcome,
    ValidationRequest,
)

_LOGGER = logging.getLogger("schema_materializer.conversion_runs")


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def resolve_configuration(config_path: str | None) -> Configuration:
    """Load the configuration file when given, otherwise return defaults."""
    if config_path is None:
        return default_configuration()
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc


def execute_payload_classification(input_path: str) -> SchemaLikenessReport:
    """Score the top-level value of a payload file."""
    try:
        payload = load_payload(input_path)
    except PayloadError as exc:
        raise RunExecutionError(str(exc)) from exc
    report = explain_json_schema_likeness(payload)
    _LOGGER.info(
        "classified %s: score=%d schema_like=%s",
        input_path,
        report.score,
        report.is_schema_like,
    )
    return report


def execute_payload_conversion(request: ConversionRequest) -> ConversionOutcome:
    """Materialize every schema-like node of a payload file."""
    configuration = resolve_configuration(request.config_path)
    try:
        payload = load_payload(request.input_path)
        converted = unsafe_recursive_json_schema_to_validator(
            payload, max_depth=configuration.conversion.max_depth
        )
        locations = tuple(
            MaterializedLocation(path=path, label=repr(validator))
            for path, validator in find_validators(
                converted, max_depth=configuration.conversion.max_depth
            )
        )
        output_path = None
        if request.output_path is not None:
            output_path = write_payload(
                converted,
                request.output_path,
                indent=configuration.output.indent,
                max_depth=configuration.conversion.max_depth,
            )
    except (PayloadError, ConversionError, MaterializationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc

    for location in locations:
        _LOGGER.info("materialized %s at %s", location.label, location.path)
    _LOGGER.info("converted %s: %d validator(s)", request.input_path, len(locations))
    return ConversionOutcome(locations=locations, output_path=output_path)


def execute_payload_validation(request: ValidationRequest) -> ValidationOutcome:
    """Materialize a schema file and parse a data file against it."""
    configuration = resolve_configuration(request.config_path)
    try:
        schema_document = load_payload(request.schema_path)
        data = load_payload(request.data_path)
        validator = unsafe_json_schema_to_validator(schema_document)
    except (PayloadError, MaterializationError) as exc:
        raise RunExecutionError(str(exc)) from exc

    result = validator.safe_parse(data)
    indent = configuration.output.indent
    if result.success:
        _LOGGER.info("%s conforms to %s", request.data_path, request.schema_path)
        return ValidationOutcome(success=True, data=result.data, errors=(), indent=indent)

    assert result.error is not None
    errors = tuple(
        f"{_format_location(error['loc'])}: {error['msg']}" for error in result.error.errors()
    )
    _LOGGER.info(
        "%s does not conform to %s (%d error(s))",
        request.data_path,
        Path(request.schema_path).name,
        len(errors),
    )
    return ValidationOutcome(success=False, data=data, errors=errors, indent=indent)


def _format_location(location: tuple[int | str, ...]) -> str:
    if not location:
        return "$"
    return "$" + "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in location)
