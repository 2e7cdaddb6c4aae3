"""Runtime validator wrapper returned by schema materialization."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError


@dataclass(frozen=True)
class ParseResult:
    """Non-raising parse outcome."""

    success: bool
    data: Any = None
    error: ValidationError | None = None


class SchemaValidator:
    """Validator built from a JSON schema document.

    `parse` returns plain data (dicts, lists and scalars) rather than model
    instances, so a conforming payload comes back equal to the input, with
    schema defaults filled in for absent keys.
    """

    __slots__ = ("_adapter", "_source")

    def __init__(self, adapter: TypeAdapter[Any], *, source: Mapping[str, Any]) -> None:
        self._adapter = adapter
        self._source = copy.deepcopy(dict(source))

    @classmethod
    def wrap(cls, candidate: Any) -> SchemaValidator:
        """Adapt an existing pydantic validator without touching its schema."""
        if isinstance(candidate, SchemaValidator):
            return candidate
        if isinstance(candidate, TypeAdapter):
            adapter = candidate
        elif isinstance(candidate, type) and issubclass(candidate, BaseModel):
            adapter = TypeAdapter(candidate)
        else:
            raise TypeError(f"Cannot wrap {type(candidate).__name__} as a schema validator.")
        return cls(adapter, source=adapter.json_schema())

    @property
    def adapter(self) -> TypeAdapter[Any]:
        return self._adapter

    def parse(self, data: Any) -> Any:
        """Validate `data` and return the validated plain value.

        Raises:
          pydantic.ValidationError: If `data` does not conform.
        """
        validated = self._adapter.validate_python(data)
        return self._adapter.dump_python(validated, by_alias=True, exclude_unset=True)

    def safe_parse(self, data: Any) -> ParseResult:
        try:
            return ParseResult(success=True, data=self.parse(data))
        except ValidationError as exc:
            return ParseResult(success=False, error=exc)

    def json_schema(self) -> dict[str, Any]:
        """Return a copy of the schema document this validator was built from."""
        return copy.deepcopy(self._source)

    def __repr__(self) -> str:
        label = self._source.get("title") or self._source.get("type") or "schema"
        return f"SchemaValidator({label!s})"
