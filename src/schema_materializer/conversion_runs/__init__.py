"""Run execution domain exports."""

from .conversion_run_use_case import (
    RunExecutionError,
    execute_payload_classification,
    execute_payload_conversion,
    execute_payload_validation,
    resolve_configuration,
)
from .run_contracts import (
    ConversionOutcome,
    ConversionRequest,
    MaterializedLocation,
    ValidationOutcome,
    ValidationRequest,
)

__all__ = [
    "ConversionOutcome",
    "ConversionRequest",
    "MaterializedLocation",
    "RunExecutionError",
    "ValidationOutcome",
    "ValidationRequest",
    "execute_payload_classification",
    "execute_payload_conversion",
    "execute_payload_validation",
    "resolve_configuration",
]
