# celine/apicontract/contracts/schema.py
"""
Schema wrapper around pydantic.

Any type pydantic can validate (models, root models, TypedDicts, generics,
``Annotated`` types) can be used as a schema in a contract. The wrapper
builds the ``TypeAdapter`` once so per-request validation stays cheap.
"""
from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError
from typing_extensions import TypedDict


class EmptyShape(TypedDict):
    """Mapping with no declared keys. Validates any mapping into ``{}``."""


class Schema:
    """Validator for a single contract slot (body, parameters, response)."""

    __slots__ = ("type", "_adapter")

    def __init__(self, type_: Any) -> None:
        self.type = type_
        self._adapter: TypeAdapter[Any] = TypeAdapter(type_)

    @classmethod
    def of(cls, value: Any) -> Schema | None:
        if value is None or isinstance(value, Schema):
            return value
        return cls(value)

    def parse(self, value: Any) -> Any:
        """Validate a python value. Raises ``pydantic.ValidationError``."""
        return self._adapter.validate_python(value)

    def parse_json(self, data: str | bytes) -> Any:
        """Validate a raw JSON document. Malformed JSON is a validation error."""
        return self._adapter.validate_json(data)

    def dump(self, value: Any) -> Any:
        """JSON-compatible rendition of an already validated value."""
        return self._adapter.dump_python(value, mode="json")

    def accepts_none(self) -> bool:
        try:
            self._adapter.validate_python(None)
        except ValidationError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Schema({getattr(self.type, '__name__', self.type)!r})"


EMPTY_SHAPE = Schema(EmptyShape)
