"""Build pydantic type annotations from schema node trees."""

from __future__ import annotations

import copy
import math
import re
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Union, get_origin

from pydantic import (
    AfterValidator,
    BeforeValidator,
    ConfigDict,
    Field,
    Strict,
    TypeAdapter,
    ValidationError,
    create_model,
    model_validator,
)

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
    SchemaNode,
    StringNode,
    UnionNode,
)

Runner = Callable[[Any], Any]

_MODEL_NAME_PATTERN = re.compile(r"[^0-9A-Za-z_]")
_MAX_REPORTED_ERRORS = 3


def build_annotation(node: SchemaNode) -> Any:
    """Return a type annotation that validates exactly what `node` describes."""
    if isinstance(node, AnyNode):
        return Any
    if isinstance(node, NeverNode):
        return Annotated[Any, AfterValidator(_reject_everything)]
    if isinstance(node, NullNode):
        return None
    if isinstance(node, BooleanNode):
        return Annotated[bool, Strict()]
    if isinstance(node, StringNode):
        return _string_annotation(node)
    if isinstance(node, NumberNode):
        return _number_annotation(node)
    if isinstance(node, ConstNode):
        return Annotated[Any, AfterValidator(_literal_check((node.value,)))]
    if isinstance(node, EnumNode):
        return Annotated[Any, AfterValidator(_literal_check(node.values))]
    if isinstance(node, ArrayNode):
        return _array_annotation(node)
    if isinstance(node, ObjectNode):
        return _object_annotation(node)
    if isinstance(node, UnionNode):
        return _union_annotation(node)
    if isinstance(node, IntersectionNode):
        runners = tuple(_plain_runner(build_annotation(part)) for part in node.parts)
        return Annotated[Any, AfterValidator(_all_of_check(runners))]
    if isinstance(node, NotNode):
        negated = _plain_runner(build_annotation(node.inner))
        return Annotated[Any, AfterValidator(_negation_check(negated))]
    raise SchemaCompilationError(f"Unsupported schema node: {type(node).__name__}.")


def _string_annotation(node: StringNode) -> Any:
    constraints = Field(min_length=node.min_length, max_length=node.max_length)
    if node.pattern is None:
        return Annotated[str, Strict(), constraints]
    return Annotated[str, Strict(), constraints, AfterValidator(_pattern_check(node.pattern))]


def _number_annotation(node: NumberNode) -> Any:
    integer_annotation = Annotated[int, Strict(), _integer_bounds(node)]
    if node.integer:
        annotation: Any = integer_annotation
    else:
        float_bounds = Field(
            ge=node.minimum,
            le=node.maximum,
            gt=node.exclusive_minimum,
            lt=node.exclusive_maximum,
        )
        annotation = Union[integer_annotation, Annotated[float, Strict(), float_bounds]]
    if node.multiple_of is None:
        return annotation
    return Annotated[annotation, AfterValidator(_multiple_of_check(node.multiple_of))]


def _integer_bounds(node: NumberNode) -> Any:
    # integer schemas only accept integral bounds
    return Field(
        ge=None if node.minimum is None else math.ceil(node.minimum),
        le=None if node.maximum is None else math.floor(node.maximum),
        gt=None if node.exclusive_minimum is None else math.floor(node.exclusive_minimum),
        lt=None if node.exclusive_maximum is None else math.ceil(node.exclusive_maximum),
    )


def _array_annotation(node: ArrayNode) -> Any:
    length = Field(min_length=node.min_items, max_length=node.max_items)
    ordered = BeforeValidator(_require_ordered)
    if not node.prefix_items and not node.closed:
        items = Any if node.items is None else build_annotation(node.items)
        return Annotated[list[items], ordered, length]  # type: ignore[valid-type]

    prefix_runners = tuple(_plain_runner(build_annotation(item)) for item in node.prefix_items)
    rest_runner = None if node.items is None else _plain_runner(build_annotation(node.items))
    return Annotated[
        list[Any],
        ordered,
        length,
        AfterValidator(_positional_check(prefix_runners, rest_runner, closed=node.closed)),
    ]


def _require_ordered(value: Any) -> Any:
    # sets, generators and dict views have no JSON array counterpart
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected an array, got {type(value).__name__}")
    return value


def _object_annotation(node: ObjectNode) -> Any:
    if not node.properties:
        if node.additional is False:
            return Annotated[dict[str, Any], Field(max_length=0)]
        if node.additional is True:
            return dict[str, Any]
        return dict[str, build_annotation(node.additional)]  # type: ignore[misc]

    field_definitions: dict[str, Any] = {}
    defaults: dict[str, Any] = {}
    for index, prop in enumerate(node.properties):
        annotation = build_annotation(prop.schema)
        if prop.required and not prop.has_default:
            field_definitions[f"field_{index}"] = (annotation, Field(alias=prop.name))
        else:
            field_definitions[f"field_{index}"] = (annotation, Field(default=None, alias=prop.name))
        if prop.has_default:
            defaults[prop.name] = prop.default

    validators: dict[str, Any] = {}
    if defaults:
        validators["fill_defaults"] = model_validator(mode="before")(_default_filler(defaults))
    if not isinstance(node.additional, bool):
        extra_runner = _plain_runner(build_annotation(node.additional))
        validators["validate_extras"] = model_validator(mode="after")(_extras_check(extra_runner))

    return create_model(
        _model_name(node.title),
        __config__=ConfigDict(extra="forbid" if node.additional is False else "allow"),
        __validators__=validators or None,
        **field_definitions,
    )


def _union_annotation(node: UnionNode) -> Any:
    options = tuple(build_annotation(option) for option in node.options)
    if node.exclusive:
        runners = tuple(_plain_runner(option) for option in options)
        return Annotated[Any, AfterValidator(_one_of_check(runners))]
    union = Union[options]  # type: ignore[valid-type]
    if get_origin(union) is not Union:
        # identical branches collapse into one type
        return union
    # anyOf is first-fit: the first accepting branch supplies defaults
    return Annotated[union, Field(union_mode="left_to_right")]


def _model_name(title: str | None) -> str:
    cleaned = _MODEL_NAME_PATTERN.sub("", title or "")
    if not cleaned or cleaned[0].isdigit():
        return "SchemaObject"
    return cleaned


def _plain_runner(annotation: Any) -> Runner:
    adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    def run(value: Any) -> Any:
        validated = adapter.validate_python(value)
        return adapter.dump_python(validated, by_alias=True, exclude_unset=True)

    return run


def _summarize(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors()[:_MAX_REPORTED_ERRORS]:
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


def _reject_everything(value: Any) -> Any:
    raise ValueError("no value is allowed here")


def _pattern_check(pattern: str) -> Callable[[str], str]:
    compiled = re.compile(pattern)

    def check(value: str) -> str:
        if compiled.search(value) is None:
            raise ValueError(f"string does not match pattern {pattern!r}")
        return value

    return check


def _multiple_of_check(multiple_of: float) -> Callable[[Any], Any]:
    divisor = Decimal(str(multiple_of))

    def check(value: Any) -> Any:
        try:
            remainder = Decimal(str(value)) % divisor
        except InvalidOperation as exc:
            raise ValueError(f"value is not a multiple of {multiple_of}") from exc
        if remainder != 0:
            raise ValueError(f"value is not a multiple of {multiple_of}")
        return value

    return check


def _literal_check(allowed: tuple[Any, ...]) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if any(json_equal(value, candidate) for candidate in allowed):
            return value
        if len(allowed) == 1:
            raise ValueError(f"value must be {allowed[0]!r}")
        raise ValueError(f"value must be one of {list(allowed)!r}")

    return check


def json_equal(left: Any, right: Any) -> bool:
    """Compare two values the way JSON does: booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(
            json_equal(left[key], right[key]) for key in left
        )
    if _is_array(left) and _is_array(right):
        return len(left) == len(right) and all(
            json_equal(item, other) for item, other in zip(left, right)
        )
    return type(left) is type(right) and left == right


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _positional_check(
    prefix_runners: tuple[Runner, ...], rest_runner: Runner | None, *, closed: bool
) -> Callable[[list[Any]], list[Any]]:
    expected = len(prefix_runners)

    def check(values: list[Any]) -> list[Any]:
        if closed and len(values) != expected:
            raise ValueError(f"expected exactly {expected} items, got {len(values)}")
        if len(values) < expected:
            raise ValueError(f"expected at least {expected} items, got {len(values)}")
        validated = []
        for index, value in enumerate(values):
            runner = prefix_runners[index] if index < expected else rest_runner
            if runner is None:
                validated.append(value)
                continue
            try:
                validated.append(runner(value))
            except ValidationError as exc:
                raise ValueError(f"item {index}: {_summarize(exc)}") from exc
        return validated

    return check


def _one_of_check(runners: tuple[Runner, ...]) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        matches = []
        failures = []
        for runner in runners:
            try:
                matches.append(runner(value))
            except ValidationError as exc:
                failures.append(_summarize(exc))
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise ValueError(f"value matches none of the oneOf schemas ({' | '.join(failures)})")
        raise ValueError(f"value matches {len(matches)} oneOf schemas, expected exactly one")

    return check


def _all_of_check(runners: tuple[Runner, ...]) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        results = []
        for runner in runners:
            try:
                results.append(runner(value))
            except ValidationError as exc:
                raise ValueError(f"value fails an allOf schema ({_summarize(exc)})") from exc
        if all(isinstance(result, dict) for result in results):
            merged: dict[str, Any] = {}
            for result in results:
                merged.update(result)
            return merged
        return results[-1]

    return check


def _negation_check(runner: Runner) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        try:
            runner(value)
        except ValidationError:
            return value
        raise ValueError("value must not match the negated schema")

    return check


def _default_filler(defaults: dict[str, Any]) -> Callable[[Any, Any], Any]:
    def fill_defaults(cls: Any, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        missing = {key: copy.deepcopy(value) for key, value in defaults.items() if key not in data}
        if not missing:
            return data
        return {**data, **missing}

    return fill_defaults


def _extras_check(runner: Runner) -> Callable[[Any], Any]:
    def validate_extras(self: Any) -> Any:
        extras = self.__pydantic_extra__ or {}
        for key in list(extras):
            try:
                extras[key] = runner(extras[key])
            except ValidationError as exc:
                raise ValueError(f"{key}: {_summarize(exc)}") from exc
        return self

    return validate_extras
