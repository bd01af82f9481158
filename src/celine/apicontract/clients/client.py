# celine/apicontract/clients/client.py
"""
Async HTTP client driven by a contract.

Thin wrapper around ``httpx.AsyncClient``: requests are built from the
contract's path templates and non-2xx responses raise
``httpx.HTTPStatusError``, which ``is_error_of`` classifies by
``(method, path, status)``.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from celine.apicontract.clients.errors import PATH_TEMPLATE_EXTENSION, error_body, is_error_of
from celine.apicontract.clients.request_builder import OutboundRequest, build_request
from celine.apicontract.contracts.contract import Contract
from celine.apicontract.contracts.endpoint import Method
from celine.apicontract.core.config import settings
from celine.apicontract.core.exceptions import ContractError

logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response, response_type: str | None) -> Any:
    if response_type == "json":
        return response.json()
    if response_type == "text":
        return response.text
    if response_type == "bytes":
        return response.content
    if not response.content:
        return None
    if "json" in response.headers.get("content-type", ""):
        return response.json()
    return response.text


class ContractClient:
    """HTTP client for the endpoints of a contract.

    Usage::

        async with ContractClient("http://api", contract) as api:
            user = await api.get("/users/:id", {"path": {"id": 7}})
    """

    def __init__(
        self,
        base_url: str,
        contract: Contract | None = None,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.contract = contract
        self.http = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.client_timeout if timeout is None else timeout,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> ContractClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def request(
        self,
        method: str | Method,
        path: str,
        config: Mapping[str, Any] | None = None,
    ) -> Any:
        outbound = build_request(method, path, config)
        if self.contract is not None and self.contract.get(path, outbound["method"]) is None:
            logger.debug("Calling %s %s outside of contract", outbound["method"].upper(), path)

        response = await self.send(outbound, path)
        return decode_body(response, outbound.get("response_type"))

    async def send(self, outbound: OutboundRequest, template: str) -> httpx.Response:
        kwargs: dict[str, Any] = {}
        if "headers" in outbound:
            kwargs["headers"] = outbound["headers"]
        if "params" in outbound:
            kwargs["params"] = outbound["params"]
        if "body" in outbound:
            body = outbound["body"]
            if isinstance(body, (bytes, bytearray, str)):
                kwargs["content"] = body
            else:
                kwargs["json"] = body

        resp = await self.http.request(
            outbound["method"].upper(),
            outbound["url"],
            extensions={PATH_TEMPLATE_EXTENSION: template},
            **kwargs,
        )
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as ex:
            logger.warning(
                "Request failed method=%s path=%s status=%s",
                outbound["method"].upper(),
                template,
                ex.response.status_code,
            )
            raise
        return resp

    async def get(self, path: str, config: Mapping[str, Any] | None = None) -> Any:
        return await self.request(Method.GET, path, config)

    async def post(self, path: str, config: Mapping[str, Any] | None = None) -> Any:
        return await self.request(Method.POST, path, config)

    async def put(self, path: str, config: Mapping[str, Any] | None = None) -> Any:
        return await self.request(Method.PUT, path, config)

    async def patch(self, path: str, config: Mapping[str, Any] | None = None) -> Any:
        return await self.request(Method.PATCH, path, config)

    async def delete(self, path: str, config: Mapping[str, Any] | None = None) -> Any:
        return await self.request(Method.DELETE, path, config)

    def is_error_of(self, error: BaseException | Any, method: str | Method, path: str, status: int) -> bool:
        return is_error_of(error, method, path, status)

    def error_body(self, error: BaseException | Any, method: str | Method, path: str, status: int) -> Any:
        if self.contract is None:
            raise ContractError("error_body requires a client built with a contract")
        return error_body(error, self.contract, method, path, status)
