"""Parse JSON schema documents into schema node variants."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import unquote

from .materialization_errors import SchemaCompilationError
from .schema_nodes import (
    AnyNode,
    ArrayNode,
    BooleanNode,
    ConstNode,
    EnumNode,
    IntersectionNode,
    NeverNode,
    NotNode,
    NullNode,
    NumberNode,
    ObjectNode,
    PropertyNode,
    SchemaNode,
    StringNode,
    UnionNode,
)

_OBJECT_SHAPE_KEYS = ("properties", "additionalProperties", "required")
_ARRAY_SHAPE_KEYS = ("items", "prefixItems")


def parse_schema_document(document: Any) -> SchemaNode:
    """Parse a schema document into its node tree.

    Local `$ref` values are resolved against `document` itself.

    Raises:
      SchemaCompilationError: If the document is malformed or uses an unsupported construct.
    """
    if not isinstance(document, Mapping):
        raise SchemaCompilationError(
            f"Schema document must be a mapping, got {type(document).__name__}."
        )
    return _SchemaParser(document).parse(document, "#")


class _SchemaParser:
    def __init__(self, root: Mapping[str, Any]) -> None:
        self._root = root
        self._resolving: list[str] = []

    def parse(self, node: Any, pointer: str) -> SchemaNode:
        if node is True:
            return AnyNode()
        if node is False:
            return NeverNode()
        if not isinstance(node, Mapping):
            raise SchemaCompilationError(
                f"Schema at {pointer} must be an object or boolean, got {type(node).__name__}."
            )
        if "$ref" in node:
            return self._parse_reference(node["$ref"], pointer)

        parsed = self._parse_combined(node, pointer)
        if node.get("nullable") is True and not isinstance(parsed, (AnyNode, NullNode)):
            parsed = UnionNode(options=(parsed, NullNode()))
        return parsed

    def _parse_combined(self, node: Mapping[str, Any], pointer: str) -> SchemaNode:
        if "const" in node:
            return ConstNode(value=node["const"])
        if "enum" in node:
            values = node["enum"]
            if not _is_sequence(values):
                raise SchemaCompilationError(f"enum at {pointer} must be an array.")
            return EnumNode(values=tuple(values))

        parts: list[SchemaNode] = []
        shape = self._parse_shape(node, pointer)
        if shape is not None:
            parts.append(shape)
        if "anyOf" in node:
            parts.append(UnionNode(options=self._parse_branches(node, "anyOf", pointer)))
        if "oneOf" in node:
            parts.append(
                UnionNode(options=self._parse_branches(node, "oneOf", pointer), exclusive=True)
            )
        if "allOf" in node:
            parts.extend(self._parse_branches(node, "allOf", pointer))
        if "not" in node:
            inner = self.parse(node["not"], f"{pointer}/not")
            parts.append(NeverNode() if isinstance(inner, AnyNode) else NotNode(inner=inner))

        if not parts:
            return AnyNode()
        if len(parts) == 1:
            return parts[0]
        return IntersectionNode(parts=tuple(parts))

    def _parse_branches(
        self, node: Mapping[str, Any], keyword: str, pointer: str
    ) -> tuple[SchemaNode, ...]:
        branches = node[keyword]
        if not _is_sequence(branches) or not branches:
            raise SchemaCompilationError(f"{keyword} at {pointer} must be a non-empty array.")
        return tuple(
            self.parse(branch, f"{pointer}/{keyword}/{index}")
            for index, branch in enumerate(branches)
        )

    def _parse_shape(self, node: Mapping[str, Any], pointer: str) -> SchemaNode | None:
        node_type = node.get("type")
        if isinstance(node_type, str):
            return self._parse_typed(node, node_type, pointer)
        if _is_sequence(node_type):
            if not node_type:
                raise SchemaCompilationError(f"type at {pointer} must not be an empty array.")
            options = tuple(self._parse_typed(node, item, pointer) for item in node_type)
            return options[0] if len(options) == 1 else UnionNode(options=options)
        if node_type is not None:
            raise SchemaCompilationError(f"type at {pointer} must be a string or an array.")

        if any(key in node for key in _OBJECT_SHAPE_KEYS):
            return self._parse_object(node, pointer)
        if any(key in node for key in _ARRAY_SHAPE_KEYS):
            return self._parse_array(node, pointer)
        return None

    def _parse_typed(self, node: Mapping[str, Any], node_type: Any, pointer: str) -> SchemaNode:
        if node_type == "string":
            return self._parse_string(node, pointer)
        if node_type in ("number", "integer"):
            return self._parse_number(node, pointer, integer=node_type == "integer")
        if node_type == "boolean":
            return BooleanNode()
        if node_type == "null":
            return NullNode()
        if node_type == "object":
            return self._parse_object(node, pointer)
        if node_type == "array":
            return self._parse_array(node, pointer)
        raise SchemaCompilationError(f"Unsupported type {node_type!r} at {pointer}.")

    def _parse_string(self, node: Mapping[str, Any], pointer: str) -> StringNode:
        pattern = node.get("pattern")
        if pattern is not None:
            if not isinstance(pattern, str):
                raise SchemaCompilationError(f"pattern at {pointer} must be a string.")
            try:
                re.compile(pattern)
            except re.error as exc:
                raise SchemaCompilationError(f"Invalid pattern at {pointer}: {exc}") from exc
        return StringNode(
            min_length=_optional_count(node, "minLength", pointer),
            max_length=_optional_count(node, "maxLength", pointer),
            pattern=pattern,
        )

    def _parse_number(self, node: Mapping[str, Any], pointer: str, *, integer: bool) -> NumberNode:
        minimum = _optional_number(node, "minimum", pointer)
        maximum = _optional_number(node, "maximum", pointer)
        exclusive_minimum: float | None
        exclusive_maximum: float | None

        # draft-04 spells exclusive bounds as booleans next to minimum/maximum
        raw_exclusive_minimum = node.get("exclusiveMinimum")
        if isinstance(raw_exclusive_minimum, bool):
            exclusive_minimum = minimum if raw_exclusive_minimum else None
            minimum = None if raw_exclusive_minimum else minimum
        else:
            exclusive_minimum = _optional_number(node, "exclusiveMinimum", pointer)
        raw_exclusive_maximum = node.get("exclusiveMaximum")
        if isinstance(raw_exclusive_maximum, bool):
            exclusive_maximum = maximum if raw_exclusive_maximum else None
            maximum = None if raw_exclusive_maximum else maximum
        else:
            exclusive_maximum = _optional_number(node, "exclusiveMaximum", pointer)

        multiple_of = _optional_number(node, "multipleOf", pointer)
        if multiple_of is not None and multiple_of <= 0:
            raise SchemaCompilationError(f"multipleOf at {pointer} must be greater than zero.")
        return NumberNode(
            integer=integer,
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            multiple_of=multiple_of,
        )

    def _parse_object(self, node: Mapping[str, Any], pointer: str) -> ObjectNode:
        raw_properties = node.get("properties", {})
        if not isinstance(raw_properties, Mapping):
            raise SchemaCompilationError(f"properties at {pointer} must be an object.")
        raw_required = node.get("required", [])
        if not _is_sequence(raw_required) or not all(
            isinstance(name, str) for name in raw_required
        ):
            raise SchemaCompilationError(f"required at {pointer} must be an array of strings.")
        required = set(raw_required)

        properties: list[PropertyNode] = []
        for name, child in raw_properties.items():
            child_schema = self.parse(child, f"{pointer}/properties/{name}")
            has_default = isinstance(child, Mapping) and "default" in child
            properties.append(
                PropertyNode(
                    name=str(name),
                    schema=child_schema,
                    required=name in required,
                    has_default=has_default,
                    default=child.get("default") if has_default else None,
                )
            )
        listed = {prop.name for prop in properties}
        for name in raw_required:
            if name not in listed:
                properties.append(PropertyNode(name=name, schema=AnyNode(), required=True))
                listed.add(name)

        raw_additional = node.get("additionalProperties", True)
        additional: bool | SchemaNode
        if isinstance(raw_additional, bool):
            additional = raw_additional
        else:
            additional = self.parse(raw_additional, f"{pointer}/additionalProperties")

        title = node.get("title")
        return ObjectNode(
            properties=tuple(properties),
            additional=additional,
            title=title if isinstance(title, str) else None,
        )

    def _parse_array(self, node: Mapping[str, Any], pointer: str) -> ArrayNode:
        raw_prefix = node.get("prefixItems")
        raw_items = node.get("items")
        prefix_items: tuple[SchemaNode, ...] = ()

        if raw_prefix is not None or _is_sequence(raw_items):
            # tuple form: prefixItems + items (2020-12) or items + additionalItems (draft-04)
            if raw_prefix is not None:
                positional, rest, rest_key = raw_prefix, raw_items, "items"
            else:
                positional, rest = raw_items, node.get("additionalItems")
                rest_key = "additionalItems"
            if not _is_sequence(positional):
                raise SchemaCompilationError(f"prefixItems at {pointer} must be an array.")
            prefix_items = tuple(
                self.parse(item, f"{pointer}/prefixItems/{index}")
                for index, item in enumerate(positional)
            )
            if rest is None or rest is False:
                return self._array_node(node, pointer, prefix_items=prefix_items, closed=True)
            items = None if rest is True else self.parse(rest, f"{pointer}/{rest_key}")
            return self._array_node(node, pointer, items=items, prefix_items=prefix_items)

        if raw_items is False:
            return self._array_node(node, pointer, closed=True)
        if raw_items is None or raw_items is True:
            return self._array_node(node, pointer)
        items = self.parse(raw_items, f"{pointer}/items")
        return self._array_node(node, pointer, items=items)

    @staticmethod
    def _array_node(
        node: Mapping[str, Any],
        pointer: str,
        *,
        items: SchemaNode | None = None,
        prefix_items: tuple[SchemaNode, ...] = (),
        closed: bool = False,
    ) -> ArrayNode:
        return ArrayNode(
            items=items,
            prefix_items=prefix_items,
            closed=closed,
            min_items=_optional_count(node, "minItems", pointer),
            max_items=_optional_count(node, "maxItems", pointer),
        )

    def _parse_reference(self, reference: Any, pointer: str) -> SchemaNode:
        if not isinstance(reference, str) or not reference.startswith("#"):
            raise SchemaCompilationError(
                f"Only local $ref values are supported, got {reference!r} at {pointer}."
            )
        if reference in self._resolving:
            raise SchemaCompilationError(f"Recursive $ref {reference!r} is not supported.")
        target = _resolve_pointer(self._root, reference)
        self._resolving.append(reference)
        try:
            return self.parse(target, reference)
        finally:
            self._resolving.pop()


def _resolve_pointer(root: Mapping[str, Any], reference: str) -> Any:
    fragment = unquote(reference[1:])
    if not fragment:
        return root
    if not fragment.startswith("/"):
        raise SchemaCompilationError(f"Unsupported $ref fragment {reference!r}.")

    target: Any = root
    for raw_token in fragment[1:].split("/"):
        token = raw_token.replace("~1", "/").replace("~0", "~")
        if isinstance(target, Mapping) and token in target:
            target = target[token]
        elif _is_sequence(target) and token.isdigit() and int(token) < len(target):
            target = target[int(token)]
        else:
            raise SchemaCompilationError(f"Cannot resolve $ref {reference!r}.")
    return target


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _optional_number(node: Mapping[str, Any], key: str, pointer: str) -> float | None:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaCompilationError(f"{key} at {pointer} must be a number.")
    return value


def _optional_count(node: Mapping[str, Any], key: str, pointer: str) -> int | None:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaCompilationError(f"{key} at {pointer} must be a non-negative integer.")
    return value
