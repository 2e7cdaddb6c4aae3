"""Structure-preserving tree walk with cycle and depth guards."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from .node_kinds import NodeKind, classify_node

DEFAULT_MAX_DEPTH = 256
MAX_DEPTH_LIMIT = 500

LeafTransform = Callable[[NodeKind, Any, str], Any]

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConversionError(Exception):
    """Raised when a payload tree cannot be walked."""


class CyclicPayloadError(ConversionError):
    """Raised when a container is reached again through its own descendants."""


class ConversionDepthError(ConversionError):
    """Raised when containers nest deeper than the configured limit."""


def transform_tree(value: Any, *, leaf: LeafTransform, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Rebuild `value`, passing every non-container node through `leaf`.

    Lists stay lists, tuples stay tuples and mappings become dicts with the
    same key order. Validator and schema nodes are leaves: the walk never
    descends into them.

    Raises:
      ValueError: If `max_depth` is outside 1..MAX_DEPTH_LIMIT.
      ConversionError: If the payload is cyclic or nests deeper than `max_depth`.
    """
    check_max_depth(max_depth)
    active: set[int] = set()

    # one interpreter frame per nesting level
    def visit(node: Any, depth: int, path: str) -> Any:
        kind = classify_node(node)
        if kind not in (NodeKind.SEQUENCE, NodeKind.MAPPING):
            return leaf(kind, node, path)
        if depth >= max_depth:
            raise ConversionDepthError(f"Payload nests deeper than {max_depth} levels at {path}.")
        marker = id(node)
        if marker in active:
            raise CyclicPayloadError(f"Payload contains a reference cycle at {path}.")
        active.add(marker)
        try:
            if kind is NodeKind.SEQUENCE:
                items: list[Any] = []
                for index, item in enumerate(node):
                    items.append(visit(item, depth + 1, f"{path}[{index}]"))
                return tuple(items) if isinstance(node, tuple) else items
            entries: dict[Any, Any] = {}
            for key, child in node.items():
                entries[key] = visit(child, depth + 1, _child_path(path, key))
            return entries
        finally:
            active.discard(marker)

    return visit(value, 0, "$")


def check_max_depth(max_depth: int) -> int:
    """Return `max_depth` if the recursive walk can honour it."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise ValueError("max_depth must be an integer.")
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}.")
    return max_depth


def _child_path(path: str, key: Any) -> str:
    if isinstance(key, str) and _IDENTIFIER_PATTERN.match(key):
        return f"{path}.{key}"
    return f"{path}[{key!r}]"
