# celine/apicontract/core/validation/response.py
"""
Outgoing response validation against an endpoint descriptor.

The interceptor checks the JSON body of a rendered response against the
schema declared for the response's status code. Valid bodies are re-rendered
through the schema so undeclared fields never reach the wire. Invalid
bodies are replaced by a fixed 500 body; the mismatch is logged, never
raised.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError
from starlette.responses import JSONResponse, Response

from celine.apicontract.contracts.endpoint import EndpointDescriptor
from celine.apicontract.core.validation.request import JSON_MEDIA_TYPE, media_type

logger = logging.getLogger(__name__)

OUT_OF_SPEC_STATUS = 500
OUT_OF_SPEC_BODY: dict[str, str] = {
    "status": "Internal server error",
    "message": "Server generated response is out of API spec",
}

_INTERCEPTED = "_contract_intercepted"


class ResponseInterceptor:
    """Validates the first JSON body sent for one endpoint's responses."""

    def __init__(self, descriptor: EndpointDescriptor, *, endpoint: str = "") -> None:
        self.descriptor = descriptor
        self.endpoint = endpoint

    @staticmethod
    def _is_json(response: Response) -> bool:
        if not hasattr(response, "body"):
            # Streaming and file responses have no rendered body
            return False
        content_type = response.headers.get("content-type") or response.media_type
        return media_type(content_type) == JSON_MEDIA_TYPE

    def check(self, status: int, body: Any) -> tuple[int, Any]:
        """Validate ``body`` for ``status``; returns what should be sent."""
        schema = self.descriptor.response_schema(status)
        if schema is None:
            return status, body
        try:
            return status, schema.dump(schema.parse(body))
        except ValidationError as exc:
            logger.warning(
                "Response out of contract endpoint=%s status=%s errors=%d",
                self.endpoint,
                status,
                exc.error_count(),
            )
            return OUT_OF_SPEC_STATUS, dict(OUT_OF_SPEC_BODY)

    def intercept(self, response: Response) -> Response:
        """Validate and rewrite ``response`` in place. Idempotent per response."""
        if getattr(response, _INTERCEPTED, False) or not self._is_json(response):
            return response
        setattr(response, _INTERCEPTED, True)

        if self.descriptor.response_schema(response.status_code) is None:
            return response

        try:
            body = json.loads(response.body) if response.body else None
        except ValueError:
            logger.warning(
                "Response body is not valid JSON endpoint=%s status=%s",
                self.endpoint,
                response.status_code,
            )
            status, content = OUT_OF_SPEC_STATUS, dict(OUT_OF_SPEC_BODY)
        else:
            status, content = self.check(response.status_code, body)

        response.status_code = status
        if isinstance(response, JSONResponse):
            response.body = response.render(content)
        else:
            response.body = JSONResponse(content).body
        response.headers["content-length"] = str(len(response.body))
        return response
