# tests/clients/test_contract_client.py
from __future__ import annotations

import json

import httpx
import pytest

from celine.apicontract.clients.client import ContractClient, decode_body
from celine.apicontract.clients.errors import PATH_TEMPLATE_EXTENSION
from celine.apicontract.core.exceptions import ContractError


def _client(handler, contract=None) -> ContractClient:
    return ContractClient(
        "http://api",
        contract,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_substitutes_path_and_returns_json(contract):
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 7, "name": "Ada"})

    async with _client(handler, contract) as api:
        data = await api.get("/users/:id", {"path": {"id": 7}})

    assert data == {"id": 7, "name": "Ada"}
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/users/7"
    assert seen[0].extensions[PATH_TEMPLATE_EXTENSION] == "/users/:id"


@pytest.mark.asyncio
async def test_post_sends_query_headers_and_json_body(contract):
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["dry_run"] == "true"
        assert request.headers["Authorization"] == "Bearer abc"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"name": "Ada"}
        return httpx.Response(201, json={"id": 3, "name": "Ada"})

    async with _client(handler, contract) as api:
        data = await api.post(
            "/users",
            {
                "query": {"dry_run": "true"},
                "header": {"Authorization": "Bearer abc"},
                "body": {"name": "Ada"},
            },
        )
    assert data["id"] == 3


@pytest.mark.asyncio
async def test_raw_body_and_response_types():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.content == b"\x00\x01"
        return httpx.Response(200, content=b"bin", headers={"content-type": "application/octet-stream"})

    config = {"path": {"name": "a"}, "body": b"\x00\x01"}
    async with _client(handler) as api:
        assert await api.put("/files/:name", {**config, "responseType": "arraybuffer"}) == b"bin"
        assert await api.put("/files/:name", {**config, "responseType": "text"}) == "bin"


@pytest.mark.asyncio
async def test_error_is_classified(contract):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"status": "Not found", "message": "User 7 not found"})

    api = _client(handler, contract)
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await api.get("/users/:id", {"path": {"id": 7}})
    await api.aclose()

    err = exc_info.value
    assert api.is_error_of(err, "get", "/users/:id", 404) is True
    assert api.is_error_of(err, "get", "/users/:id", 500) is False
    assert api.is_error_of(err, "delete", "/users/:id", 404) is False
    assert api.is_error_of(err, "get", "/users/7", 404) is False

    body = api.error_body(err, "get", "/users/:id", 404)
    assert body.message == "User 7 not found"


@pytest.mark.asyncio
async def test_network_error_is_not_classified(contract):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    api = _client(handler, contract)
    with pytest.raises(httpx.ConnectError) as exc_info:
        await api.get("/users/:id", {"path": {"id": 7}})
    await api.aclose()

    assert api.is_error_of(exc_info.value, "get", "/users/:id", 404) is False


@pytest.mark.asyncio
async def test_error_body_requires_contract():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={})

    api = _client(handler)
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await api.get("/users")
    await api.aclose()

    with pytest.raises(ContractError):
        api.error_body(exc_info.value, "get", "/users", 404)


@pytest.mark.asyncio
async def test_end_to_end_against_contract_router(contract, build_app):
    app = build_app()
    api = ContractClient("http://testserver", contract, transport=httpx.ASGITransport(app=app))

    async with api:
        user = await api.get("/users/:id", {"path": {"id": 2}})
        assert user == {"id": 2, "name": "Grace"}

        users = await api.get("/users", {"query": {"limit": 1}})
        assert users == [{"id": 1, "name": "Ada"}]

        created = await api.post("/users", {"body": {"name": "Linus"}})
        assert created == {"id": 3, "name": "Linus"}

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await api.get("/users/:id", {"path": {"id": 99}})
        assert api.is_error_of(exc_info.value, "get", "/users/:id", 404)
        assert api.error_body(exc_info.value, "get", "/users/:id", 404).status == "Not found"


class TestDecodeBody:
    def test_empty_body(self):
        assert decode_body(httpx.Response(204), None) is None

    def test_json_sniffed(self):
        assert decode_body(httpx.Response(200, json=[1]), None) == [1]

    def test_text_fallback(self):
        assert decode_body(httpx.Response(200, text="hi"), None) == "hi"

    def test_explicit_json(self):
        response = httpx.Response(200, content=b'{"a": 1}', headers={"content-type": "text/plain"})
        assert decode_body(response, "json") == {"a": 1}
