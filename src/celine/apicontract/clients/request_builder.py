# celine/apicontract/clients/request_builder.py
"""
Outbound request construction from a path template and a call config.

Config keys::

    {
        "path": {"id": 7},             # substituted into ":id"
        "query": {...},                # -> params
        "header": {...},               # -> headers
        "body": {...},                 # -> body
        "responseType": "json",        # or "response_type"
    }

Keys absent from the config are absent from the built request so the
transport's own defaults apply.
"""
from __future__ import annotations

import re
from typing import Any, Literal, Mapping, TypedDict

from celine.apicontract.contracts.endpoint import Method

ResponseType = Literal["json", "text", "bytes"]

_RESPONSE_TYPE_ALIASES: dict[str, ResponseType] = {
    "json": "json",
    "text": "text",
    "bytes": "bytes",
    "arraybuffer": "bytes",
    "blob": "bytes",
}


class OutboundRequest(TypedDict, total=False):
    method: str
    url: str
    headers: Mapping[str, str]
    params: Mapping[str, Any]
    body: Any
    response_type: ResponseType


def _to_path_segment(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def replace_path_params(template: str, path: Mapping[str, Any]) -> str:
    """Substitute ``:name`` placeholders. Unknown placeholders stay verbatim."""
    url = template
    for key, value in path.items():
        pattern = re.compile(rf":{re.escape(key)}(?![A-Za-z0-9_])")
        url = pattern.sub(lambda _: _to_path_segment(value), url)
    return url


def normalize_response_type(value: str) -> ResponseType:
    try:
        return _RESPONSE_TYPE_ALIASES[value.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported response type '{value}'. Expected one of {sorted(_RESPONSE_TYPE_ALIASES)}"
        ) from None


def build_request(
    method: str | Method,
    path: str,
    config: Mapping[str, Any] | None = None,
) -> OutboundRequest:
    m = Method.parse(method).value
    if not config:
        # Caller guarantees the template has no placeholders
        return {"method": m, "url": path}

    request: OutboundRequest = {
        "method": m,
        "url": replace_path_params(path, config["path"]) if "path" in config else path,
    }
    if "header" in config:
        request["headers"] = config["header"]
    if "query" in config:
        request["params"] = config["query"]
    if "body" in config:
        request["body"] = config["body"]

    response_type = config.get("response_type", config.get("responseType"))
    if response_type is not None:
        request["response_type"] = normalize_response_type(response_type)
    return request
