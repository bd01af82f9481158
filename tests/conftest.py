# tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, Optional, Union

import pytest
from fastapi import FastAPI, Response
from pydantic import BaseModel

from celine.apicontract import Contract, ContractRouter, Inputs


class User(BaseModel):
    id: int
    name: str


class UserPath(BaseModel):
    id: int


class ListQuery(BaseModel):
    active: Union[bool, str, None] = None
    limit: int = 10


class NewUser(BaseModel):
    name: str


class NotFound(BaseModel):
    status: str
    message: str


class Health(BaseModel):
    status: str


USERS: dict[int, dict[str, Any]] = {
    1: {"id": 1, "name": "Ada", "password": "hunter2"},
    2: {"id": 2, "name": "Grace", "password": "cobol"},
}


def make_contract() -> Contract:
    return Contract(
        {
            "/users": {
                "get": {
                    "parameters": {"query": ListQuery},
                    "responses": {200: list[User]},
                },
                "post": {
                    "request": NewUser,
                    "responses": {201: User},
                },
            },
            "/users/:id": {
                "get": {
                    "parameters": {"path": UserPath},
                    "responses": {200: User, 404: NotFound},
                    "errors": {404: NotFound},
                },
                "delete": {
                    "parameters": {"path": UserPath},
                    "responses": {200: User},
                },
            },
            "/health": {
                "get": {"responses": {"default": Health}},
            },
            "/files/:name": {
                "put": {"request": NewUser, "responses": {200: Health}},
            },
        }
    )


@pytest.fixture
def contract() -> Contract:
    return make_contract()


@pytest.fixture
def calls() -> list[str]:
    """Names of endpoints that actually ran."""
    return []


@pytest.fixture
def build_app(contract: Contract, calls: list[str]) -> Callable[..., FastAPI]:
    """Factory wiring a users API on a ContractRouter."""

    def _build(
        *,
        attach_response_validator: bool = True,
        error_handler: Optional[Callable[..., Any]] = None,
        health_body: Optional[dict[str, Any]] = None,
    ) -> FastAPI:
        router = ContractRouter(
            contract,
            attach_response_validator=attach_response_validator,
            error_handler=error_handler,
        )

        @router.get("/users")
        async def list_users(inputs: Inputs) -> Any:
            calls.append("list_users")
            return [
                {"id": u["id"], "name": u["name"]}
                for u in USERS.values()
            ][: inputs.query.limit]

        @router.post("/users", status_code=201)
        async def create_user(inputs: Inputs) -> Any:
            calls.append("create_user")
            return {"id": 3, "name": inputs.body.name, "password": "generated"}

        @router.get("/users/:id")
        async def get_user(inputs: Inputs, response: Response) -> Any:
            calls.append("get_user")
            user = USERS.get(inputs.path.id)
            if user is None:
                response.status_code = 404
                return {"status": "Not found", "message": f"User {inputs.path.id} not found"}
            return user

        @router.delete("/users/{id}")
        async def delete_user(inputs: Inputs) -> Any:
            calls.append("delete_user")
            return {"id": "not-a-number", "name": "broken"}

        @router.get("/health")
        async def health(inputs: Inputs) -> Any:
            calls.append("health")
            return health_body if health_body is not None else {"status": "ok"}

        @router.put("/files/:name")
        async def put_file(inputs: Inputs) -> Any:
            calls.append("put_file")
            body = inputs.body
            if isinstance(body, bytes):
                return {"status": f"raw:{body.decode()}"}
            return {"status": f"json:{body.name}"}

        @router.get("/metrics")
        async def metrics() -> Any:
            calls.append("metrics")
            return {"anything": "goes"}

        app = FastAPI()
        app.include_router(router.router)
        app.state.contract_router = router
        return app

    return _build
