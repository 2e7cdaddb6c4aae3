"""Closed set of schema node variants produced by the schema parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class AnyNode:
    """Accepts every value (`{}` or `true`)."""


@dataclass(frozen=True)
class NeverNode:
    """Accepts no value (`false` or `{"not": {}}`)."""


@dataclass(frozen=True)
class NotNode:
    """Accepts values the inner schema rejects."""

    inner: SchemaNode


@dataclass(frozen=True)
class NullNode:
    """Accepts only `None`."""


@dataclass(frozen=True)
class StringNode:
    """Strict string with optional length and pattern constraints."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None


@dataclass(frozen=True)
class NumberNode:  # pylint: disable=too-many-instance-attributes
    """Strict number; `integer` excludes floats."""

    integer: bool
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | None = None
    exclusive_maximum: float | None = None
    multiple_of: float | None = None


@dataclass(frozen=True)
class BooleanNode:
    """Strict boolean."""


@dataclass(frozen=True)
class ConstNode:
    """Single literal value."""

    value: Any


@dataclass(frozen=True)
class EnumNode:
    """Closed set of literal values."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class ArrayNode:
    """List with element or positional (tuple) item schemas.

    `items` validates every element after `prefix_items`; `None` means any.
    A `closed` array holds exactly `len(prefix_items)` elements.
    """

    items: SchemaNode | None = None
    prefix_items: tuple[SchemaNode, ...] = ()
    closed: bool = False
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True)
class PropertyNode:
    """One named object property."""

    name: str
    schema: SchemaNode
    required: bool
    has_default: bool = False
    default: Any = None


@dataclass(frozen=True)
class ObjectNode:
    """Keyed mapping; `additional` is a flag or the schema for unlisted keys."""

    properties: tuple[PropertyNode, ...] = ()
    additional: bool | SchemaNode = True
    title: str | None = None


@dataclass(frozen=True)
class UnionNode:
    """`anyOf` branches, or `oneOf` branches when `exclusive`."""

    options: tuple[SchemaNode, ...]
    exclusive: bool = False


@dataclass(frozen=True)
class IntersectionNode:
    """`allOf` parts; every part must accept the value."""

    parts: tuple[SchemaNode, ...]


SchemaNode = Union[
    AnyNode,
    NeverNode,
    NotNode,
    NullNode,
    StringNode,
    NumberNode,
    BooleanNode,
    ConstNode,
    EnumNode,
    ArrayNode,
    ObjectNode,
    UnionNode,
    IntersectionNode,
]
