"""
Request builder.

Turns a route, optional query parameters and caller options into an absolute
URL plus a normalized RequestDescriptor.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..models.request import MultipartForm, QueryInput, RequestDescriptor, RequestOptions
from .exceptions import ConfigurationError

ABSOLUTE_URL_PATTERN = re.compile(r"^(?:[a-z][a-z\d+\-.]*:)?//", re.IGNORECASE)
BODYLESS_METHODS = frozenset({"GET", "HEAD"})
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class ExecutionContext:
    """
    Capabilities of the environment the client runs in.

    origin is used to resolve relative routes; None means there is no
    ambient origin (e.g. a worker process outside any web context).
    """

    origin: Optional[str] = None


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _merge_query(url: httpx.URL, query: Optional[QueryInput]) -> httpx.URL:
    if not query:
        return url

    params = url.params
    if isinstance(query, httpx.QueryParams):
        for key, value in query.multi_items():
            params = params.set(key, value)
    else:
        for key, value in query.items():
            if value is None:
                continue
            params = params.set(key, _stringify(value))

    return url.copy_with(params=params)


def build_url(
    route: str,
    query: Optional[QueryInput] = None,
    context: Optional[ExecutionContext] = None,
) -> httpx.URL:
    """
    Resolve a route into an absolute URL and merge the query parameters.

    Raises:
        ConfigurationError: route is relative and no origin is available.
    """
    origin = context.origin if context else None

    if ABSOLUTE_URL_PATTERN.match(route):
        if route.startswith("//"):
            scheme = httpx.URL(origin).scheme if origin else "https"
            route = f"{scheme}:{route}"
        url = httpx.URL(route)
    else:
        if not origin:
            raise ConfigurationError(
                f"Cannot resolve relative URL '{route}' without an execution origin"
            )
        url = httpx.URL(origin).join(route)

    return _merge_query(url, query)


def is_wire_ready(body: Any) -> bool:
    """True when the body can be sent as-is, without JSON serialization."""
    if isinstance(
        body, (str, bytes, bytearray, memoryview, httpx.QueryParams, MultipartForm)
    ):
        return True
    if hasattr(body, "read") or hasattr(body, "__aiter__"):
        return True
    # Generators and other byte iterators; containers are JSON values.
    if hasattr(body, "__next__"):
        return True
    return False


def prepare_request(options: Optional[RequestOptions] = None) -> RequestDescriptor:
    """
    Build a fresh RequestDescriptor from caller options.

    GET and HEAD never carry a body. Non wire-ready bodies are serialized as
    JSON with a default Content-Type of application/json.
    """
    options = options or RequestOptions()
    method = (options.method or "GET").upper()
    headers = httpx.Headers(options.headers or {})
    extra = dict(options.extra)
    body = options.body

    if body is None or method in BODYLESS_METHODS:
        return RequestDescriptor(method=method, headers=headers, extra=extra)

    if is_wire_ready(body):
        if isinstance(body, httpx.QueryParams) and "Content-Type" not in headers:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        return RequestDescriptor(method=method, headers=headers, body=body, extra=extra)

    if "Content-Type" not in headers:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return RequestDescriptor(
        method=method, headers=headers, body=json.dumps(body, separators=(",", ":")), extra=extra
    )
