# celine/apicontract/contracts/contract.py
"""
Contract – immutable ``path -> method -> EndpointDescriptor`` mapping.

Paths use ``:name`` placeholders, the same templates the client
substitutes. The router converts them to Starlette's ``{name}`` syntax.
"""
from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from celine.apicontract.contracts.endpoint import EndpointDescriptor, Method
from celine.apicontract.core.exceptions import ContractError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{[^}]*\}|:([A-Za-z_][A-Za-z0-9_]*)")
_ROUTE_PARAM = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::[^}]*)?\}")


def _route_param(match: re.Match[str]) -> str:
    name = match.group(1)
    return match.group(0) if name is None else "{" + name + "}"


def to_route_path(path: str) -> str:
    """``/users/:id`` -> ``/users/{id}``. Existing ``{...}`` params are kept."""
    return _PLACEHOLDER.sub(_route_param, path)


def to_template_path(path: str) -> str:
    """``/users/{id}`` (or ``{id:int}``) -> ``/users/:id``."""
    return _ROUTE_PARAM.sub(r":\1", path)


class Contract:
    """Read-only description of every endpoint of an API."""

    def __init__(self, endpoints: Mapping[str, Mapping[Any, Any]]) -> None:
        table: dict[str, Mapping[Method, EndpointDescriptor]] = {}
        for path, methods in endpoints.items():
            if not isinstance(path, str) or not path.startswith("/"):
                raise ContractError(f"Contract paths must start with '/': {path!r}")
            entries: dict[Method, EndpointDescriptor] = {}
            for raw_method, descriptor in methods.items():
                method = Method.parse(raw_method)
                if method in entries:
                    raise ContractError(f"Duplicate endpoint: {method.value.upper()} {path}")
                if not isinstance(descriptor, EndpointDescriptor):
                    descriptor = EndpointDescriptor.from_dict(descriptor)
                entries[method] = descriptor
            table[path] = MappingProxyType(entries)
        self._endpoints: Mapping[str, Mapping[Method, EndpointDescriptor]] = MappingProxyType(table)
        logger.debug("Loaded contract with %d endpoint(s)", len(self))

    def get(self, path: str, method: str | Method) -> EndpointDescriptor | None:
        methods = self._endpoints.get(path)
        if methods is None:
            return None
        return methods.get(Method.parse(method))

    def require(self, path: str, method: str | Method) -> EndpointDescriptor:
        descriptor = self.get(path, method)
        if descriptor is None:
            raise ContractError(f"No endpoint {str(Method.parse(method).value).upper()} {path} in contract")
        return descriptor

    def paths(self) -> list[str]:
        return list(self._endpoints)

    def methods_for(self, path: str) -> list[Method]:
        return list(self._endpoints.get(path, {}))

    def paths_for(self, method: str | Method) -> list[str]:
        m = Method.parse(method)
        return [p for p, methods in self._endpoints.items() if m in methods]

    def __contains__(self, path: object) -> bool:
        return path in self._endpoints

    def __iter__(self) -> Iterator[tuple[str, Method, EndpointDescriptor]]:
        for path, methods in self._endpoints.items():
            for method, descriptor in methods.items():
                yield path, method, descriptor

    def __len__(self) -> int:
        return sum(len(m) for m in self._endpoints.values())

    def __repr__(self) -> str:
        return f"Contract(paths={self.paths()!r})"
