# celine/apicontract/api/router.py
"""
Contract-aware router.

``ContractRouter`` wraps a FastAPI ``APIRouter`` and exposes one
registration operation per supported method. At registration time the
(path, method) pair is looked up in the contract:

- unmatched routes are registered on the underlying router unchanged;
- matched routes get a ``ContractRoute`` whose handler runs the request
  validator, then the user endpoint, then (when enabled) the response
  interceptor on the produced response. ``HTTPException``s raised by the
  endpoint are rendered first so their bodies are checked as well.

The validated bundle is exposed to endpoints through the ``Inputs``
dependency (``celine.apicontract.api.dependencies``).
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, ClassVar, TypeVar

from fastapi import APIRouter
from fastapi.exception_handlers import http_exception_handler
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response

from celine.apicontract.api.errors import ErrorHandler, default_error_handler
from celine.apicontract.contracts.contract import Contract, to_route_path, to_template_path
from celine.apicontract.contracts.endpoint import EndpointDescriptor, Method
from celine.apicontract.core.config import settings
from celine.apicontract.core.exceptions import RequestValidationError
from celine.apicontract.core.validation.request import RequestValidator
from celine.apicontract.core.validation.response import ResponseInterceptor

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ContractRoute(APIRoute):
    """APIRoute that validates requests and (optionally) responses.

    Subclassed once per registered endpoint by ``ContractRouter`` so the
    class itself carries the validator; ``include_router`` re-creates
    routes from ``type(route)`` and keeps the pipeline intact.
    """

    request_validator: ClassVar[RequestValidator]
    response_interceptor: ClassVar[ResponseInterceptor | None] = None
    error_handler: ClassVar[ErrorHandler]

    def get_route_handler(self) -> Callable[[Request], Any]:
        route_handler = super().get_route_handler()
        validator = self.request_validator
        interceptor = self.response_interceptor
        error_handler = self.error_handler

        async def contract_route_handler(request: Request) -> Response:
            try:
                request.state.inputs = await validator.validate(request)
            except RequestValidationError as exc:
                result = error_handler(exc, request)
                if inspect.isawaitable(result):
                    result = await result
                return result

            if interceptor is None:
                return await route_handler(request)
            try:
                response = await route_handler(request)
            except HTTPException as exc:
                # Raised errors are rendered here so their body is checked too
                response = await http_exception_handler(request, exc)
            return interceptor.intercept(response)

        return contract_route_handler


class ContractRouter:
    """Router that enforces a ``Contract`` on every matching endpoint."""

    def __init__(
        self,
        contract: Contract,
        *,
        attach_response_validator: bool | None = None,
        error_handler: ErrorHandler | None = None,
        **router_kwargs: Any,
    ) -> None:
        self.contract = contract
        self.attach_response_validator = (
            settings.attach_response_validator
            if attach_response_validator is None
            else attach_response_validator
        )
        self.error_handler = error_handler or default_error_handler
        self.router = APIRouter(**router_kwargs)

    # -- lookup ----------------------------------------------------------

    def lookup(self, path: str, method: str | Method) -> EndpointDescriptor | None:
        """Descriptor for ``path`` given as ``/users/:id`` or ``/users/{id}``."""
        descriptor = self.contract.get(path, method)
        if descriptor is None:
            descriptor = self.contract.get(to_template_path(path), method)
        return descriptor

    def _route_class(
        self, method: Method, path: str, descriptor: EndpointDescriptor
    ) -> type[ContractRoute]:
        endpoint = f"{method.value.upper()} {path}"
        interceptor = (
            ResponseInterceptor(descriptor, endpoint=endpoint)
            if self.attach_response_validator
            else None
        )
        return type(
            "ContractRoute",
            (ContractRoute,),
            {
                "request_validator": RequestValidator(descriptor),
                "response_interceptor": interceptor,
                "error_handler": staticmethod(self.error_handler),
            },
        )

    # -- registration ----------------------------------------------------

    def add_route(
        self,
        method: str | Method,
        path: str,
        endpoint: Callable[..., Any],
        **kwargs: Any,
    ) -> None:
        m = Method.parse(method)
        descriptor = self.lookup(path, m)

        if descriptor is None:
            logger.debug("Route %s %s not in contract, registering as-is", m.value.upper(), path)
            self.router.add_api_route(path, endpoint, methods=[m.value.upper()], **kwargs)
            return

        kwargs.pop("route_class_override", None)
        self.router.add_api_route(
            to_route_path(path),
            endpoint,
            methods=[m.value.upper()],
            route_class_override=self._route_class(m, path, descriptor),
            **kwargs,
        )
        logger.debug(
            "Route %s %s bound to contract (response validation: %s)",
            m.value.upper(),
            path,
            self.attach_response_validator,
        )

    def _register(self, method: Method, path: str, **kwargs: Any) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            self.add_route(method, path, func, **kwargs)
            return func

        return decorator

    def get(self, path: str, **kwargs: Any) -> Callable[[F], F]:
        return self._register(Method.GET, path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Callable[[F], F]:
        return self._register(Method.POST, path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Callable[[F], F]:
        return self._register(Method.PUT, path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Callable[[F], F]:
        return self._register(Method.PATCH, path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Callable[[F], F]:
        return self._register(Method.DELETE, path, **kwargs)

    # -- passthrough -----------------------------------------------------

    def include_router(self, router: APIRouter | ContractRouter, **kwargs: Any) -> None:
        """Mount another router. No contract interception is added."""
        if isinstance(router, ContractRouter):
            router = router.router
        self.router.include_router(router, **kwargs)

    def mount(self, path: str, app: Any, name: str | None = None) -> None:
        self.router.mount(path, app, name=name)

    @property
    def routes(self) -> list[Any]:
        return self.router.routes
