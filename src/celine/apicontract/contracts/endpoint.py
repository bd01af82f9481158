# celine/apicontract/contracts/endpoint.py
"""
Endpoint contracts.

An endpoint descriptor is the per-(path, method) entry of a contract: the
accepted parameters and request body, the expected response body per
status code (plus a ``default`` fallback) and the documented error bodies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping, Union

from celine.apicontract.contracts.schema import Schema
from celine.apicontract.core.exceptions import ContractError


class Method(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"

    @classmethod
    def parse(cls, value: str | Method) -> Method:
        try:
            return cls(str(value.value if isinstance(value, Method) else value).lower())
        except ValueError:
            raise ContractError(
                f"Unsupported method '{value}'. Supported: {[m.value for m in METHODS]}"
            ) from None


# Every method supported by contracts, routers and clients.
METHODS: tuple[Method, ...] = tuple(Method)

DEFAULT: Literal["default"] = "default"

StatusKey = Union[int, Literal["default"]]


def _freeze_responses(responses: Mapping[Any, Any] | None) -> Mapping[StatusKey, Schema | None]:
    frozen: dict[StatusKey, Schema | None] = {}
    for key, schema in (responses or {}).items():
        if key == DEFAULT:
            status: StatusKey = DEFAULT
        else:
            try:
                status = int(key)
            except (TypeError, ValueError):
                raise ContractError(f"Invalid response status key: {key!r}") from None
        frozen[status] = Schema.of(schema)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class Parameters:
    """Schemas for the path, query and header parts of a request."""

    path: Schema | None = None
    query: Schema | None = None
    header: Schema | None = None

    def __post_init__(self) -> None:
        for name in ("path", "query", "header"):
            object.__setattr__(self, name, Schema.of(getattr(self, name)))


@dataclass(frozen=True)
class EndpointDescriptor:
    """Contract entry for a single (path, method).

    Attributes:
        request: Schema of the JSON request body, if any.
        parameters: Path, query and header parameter schemas.
        responses: Expected body schema per status code. The ``"default"``
            key is used for codes without a specific entry.
        errors: Documented failure bodies per status code. Only used to
            classify and parse errors on the client.
    """

    request: Schema | None = None
    parameters: Parameters = field(default_factory=Parameters)
    responses: Mapping[StatusKey, Schema | None] = field(default_factory=dict)
    errors: Mapping[int, Schema | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "request", Schema.of(self.request))
        if isinstance(self.parameters, Mapping):
            object.__setattr__(self, "parameters", Parameters(**self.parameters))
        object.__setattr__(self, "responses", _freeze_responses(self.responses))
        errors = _freeze_responses(self.errors)
        if DEFAULT in errors:
            raise ContractError("Error bodies must be keyed by an explicit status code")
        object.__setattr__(self, "errors", errors)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EndpointDescriptor:
        unknown = set(data) - {"request", "parameters", "responses", "errors"}
        if unknown:
            raise ContractError(f"Unknown endpoint keys: {sorted(unknown)}")
        params = data.get("parameters") or {}
        return cls(
            request=data.get("request"),
            parameters=Parameters(
                path=params.get("path"),
                query=params.get("query"),
                header=params.get("header"),
            ),
            responses=data.get("responses") or {},
            errors=data.get("errors") or {},
        )

    @property
    def has_default(self) -> bool:
        return DEFAULT in self.responses

    def documented_codes(self) -> list[int]:
        return sorted(code for code in self.responses if code != DEFAULT)

    def response_schema(self, status: int) -> Schema | None:
        """Schema for ``status``, falling back to ``default``.

        An explicit ``None`` entry (e.g. ``{204: None}``) means no body check
        and does not fall back.
        """
        if status in self.responses:
            return self.responses[status]
        return self.responses.get(DEFAULT)

    def error_schema(self, status: int) -> Schema | None:
        if status in self.errors:
            return self.errors[status]
        return self.responses.get(status)

    @property
    def requires_config(self) -> bool:
        """Whether a client call must pass a config for this endpoint."""
        slots = (
            self.parameters.path,
            self.parameters.query,
            self.parameters.header,
            self.request,
        )
        return any(s is not None and not s.accepts_none() for s in slots)
