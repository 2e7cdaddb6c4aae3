"""Recursive conversion exports."""

from .node_kinds import NodeKind, classify_node
from .recursive_converter import (
    find_validators,
    recursive_validator_to_json_schema,
    unsafe_recursive_json_schema_to_validator,
    validator_to_json_schema,
)
from .tree_walk import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    ConversionDepthError,
    ConversionError,
    CyclicPayloadError,
    check_max_depth,
    transform_tree,
)
from .validator_coercion import SchemaShapeError, coerce_validator

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "ConversionDepthError",
    "ConversionError",
    "CyclicPayloadError",
    "NodeKind",
    "SchemaShapeError",
    "check_max_depth",
    "classify_node",
    "coerce_validator",
    "find_validators",
    "recursive_validator_to_json_schema",
    "transform_tree",
    "unsafe_recursive_json_schema_to_validator",
    "validator_to_json_schema",
]
