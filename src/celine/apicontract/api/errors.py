# celine/apicontract/api/errors.py
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Union

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from celine.apicontract.core.exceptions import RequestValidationError

logger = logging.getLogger(__name__)

ErrorHandler = Callable[
    [RequestValidationError, Request],
    Union[Response, Awaitable[Response]],
]


def default_error_handler(error: RequestValidationError, request: Request) -> Response:
    """Answer 400 with the failing request part and pydantic's error list."""
    logger.info(
        "Rejected %s %s: invalid %s", request.method, request.url.path, error.location
    )
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(
            {
                "status": "Bad request",
                "location": error.location,
                "errors": error.errors(),
            }
        ),
    )
