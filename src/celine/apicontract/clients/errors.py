# celine/apicontract/clients/errors.py
"""
Classification of errors raised by contract client calls.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from celine.apicontract.contracts.contract import Contract
from celine.apicontract.contracts.endpoint import Method
from celine.apicontract.core.exceptions import ContractError

logger = logging.getLogger(__name__)

PATH_TEMPLATE_EXTENSION = "path_template"


def request_template(request: httpx.Request) -> str:
    """Path template a request was built from, or its URL path."""
    template = request.extensions.get(PATH_TEMPLATE_EXTENSION)
    if template is None:
        return request.url.path
    return template


def is_error_of(error: BaseException | Any, method: str | Method, path: str, status: int) -> bool:
    """True only when ``error`` is the HTTP status error of ``(method, path, status)``.

    Transport failures without a response (timeouts, refused connections)
    never match.
    """
    if not isinstance(error, httpx.HTTPStatusError):
        return False
    try:
        expected = Method.parse(method).value
    except ContractError:
        return False

    if error.request.method.lower() != expected:
        return False
    if request_template(error.request) != path:
        return False
    if error.response.status_code != status:
        return False
    return True


def error_body(
    error: BaseException | Any,
    contract: Contract,
    method: str | Method,
    path: str,
    status: int,
) -> Any:
    """Typed body of a documented error.

    Raises:
        ContractError: If ``error`` is not the error of ``(method, path, status)``.
        pydantic.ValidationError: If the body does not match its documented schema.
    """
    if not is_error_of(error, method, path, status):
        raise ContractError(
            f"Error is not {getattr(method, 'value', method).upper()} {path} -> {status}"
        )

    response: httpx.Response = error.response
    try:
        data = response.json()
    except ValueError:
        data = response.text

    schema = contract.require(path, method).error_schema(status)
    if schema is None:
        return data
    try:
        return schema.parse(data)
    except ValidationError:
        logger.warning(
            "Error body out of contract method=%s path=%s status=%s", method, path, status
        )
        raise
