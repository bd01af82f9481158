# celine/apicontract/core/validation/request.py
"""
Inbound request validation against an endpoint descriptor.

Categories are validated in order (path, query, body) and validation stops
at the first failing category. Headers are carried through unvalidated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError
from starlette.requests import Request

from celine.apicontract.contracts.endpoint import EndpointDescriptor
from celine.apicontract.contracts.schema import EMPTY_SHAPE
from celine.apicontract.core.exceptions import RequestValidationError

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class ValidatedInputs:
    """Per-request bundle handed to contract-aware endpoints.

    Attributes:
        path: Validated path parameters (``{}`` when none are declared).
        query: Validated query parameters (``{}`` when none are declared).
        header: Raw request headers. Header schemas are not enforced.
        body: Validated JSON body, or the raw request bytes when the body
            is not JSON or the endpoint declares no request schema.
    """

    path: Any
    query: Any
    header: Mapping[str, str]
    body: Any


def coerce_query_booleans(query: Mapping[str, Any]) -> dict[str, Any]:
    """Turn literal ``"true"``/``"false"`` values into booleans.

    Every other value is left for the schema to coerce.
    """
    coerced: dict[str, Any] = {}
    for key, value in query.items():
        if value == "true":
            coerced[key] = True
        elif value == "false":
            coerced[key] = False
        else:
            coerced[key] = value
    return coerced


def query_to_dict(items: list[tuple[str, str]]) -> dict[str, Any]:
    """Flatten query items; repeated keys become lists."""
    result: dict[str, Any] = {}
    for key, value in items:
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


def media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class RequestValidator:
    """Validates the path, query and body of requests for one endpoint."""

    def __init__(self, descriptor: EndpointDescriptor) -> None:
        self.descriptor = descriptor

    def validate_parts(
        self,
        *,
        raw_path: Mapping[str, Any],
        raw_query: Mapping[str, Any],
        raw_headers: Mapping[str, str],
        raw_body: Any,
        content_type: str | None,
    ) -> ValidatedInputs:
        """Validate already extracted request parts.

        Raises:
            RequestValidationError: On the first category that fails.
        """
        params = self.descriptor.parameters

        try:
            path = (params.path or EMPTY_SHAPE).parse(dict(raw_path))
        except ValidationError as exc:
            raise RequestValidationError("path", exc) from exc

        try:
            if params.query is not None:
                query = params.query.parse(coerce_query_booleans(raw_query))
            else:
                query = EMPTY_SHAPE.parse(dict(raw_query))
        except ValidationError as exc:
            raise RequestValidationError("query", exc) from exc

        body = raw_body
        if media_type(content_type) == JSON_MEDIA_TYPE and self.descriptor.request is not None:
            try:
                if isinstance(raw_body, (bytes, bytearray, str)) and not raw_body.strip():
                    # An empty JSON body is read as an empty object
                    body = self.descriptor.request.parse({})
                elif isinstance(raw_body, (bytes, bytearray, str)):
                    body = self.descriptor.request.parse_json(raw_body)
                else:
                    body = self.descriptor.request.parse(raw_body)
            except ValidationError as exc:
                raise RequestValidationError("body", exc) from exc

        return ValidatedInputs(path=path, query=query, header=raw_headers, body=body)

    async def validate(self, request: Request) -> ValidatedInputs:
        """Validate a Starlette request."""
        return self.validate_parts(
            raw_path=request.path_params,
            raw_query=query_to_dict(request.query_params.multi_items()),
            raw_headers=request.headers,
            raw_body=await request.body(),
            content_type=request.headers.get("content-type"),
        )
