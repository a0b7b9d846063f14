"""
Request option and descriptor models.

RequestOptions is what callers hand to the gate; RequestDescriptor is the
normalized, wire-level form produced by the request builder.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import httpx

QueryValue = Union[str, int, float, bool, None]
QueryInput = Union[httpx.QueryParams, Mapping[str, QueryValue]]


@dataclass(frozen=True)
class MultipartForm:
    """Multipart form body: plain fields plus httpx-style file tuples."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RequestOptions:
    """
    Caller-facing request options.

    Attributes:
        method: HTTP method, case-insensitive. Defaults to GET.
        query: Mapping or httpx.QueryParams merged into the URL query string.
        headers: Headers to send with the request.
        body: Wire-ready content, or any JSON-serializable value.
        extra: Transport keyword arguments passed through to httpx (timeout, ...).
    """

    method: str = "GET"
    query: Optional[QueryInput] = None
    headers: Optional[Mapping[str, str]] = None
    body: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestDescriptor:
    """Normalized request. Pure data, safe to inspect or log."""

    method: str
    headers: httpx.Headers
    body: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_httpx_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = dict(self.extra)
        kwargs["headers"] = self.headers
        body = self.body
        if body is None:
            return kwargs
        if isinstance(body, MultipartForm):
            kwargs["data"] = body.fields
            kwargs["files"] = body.files
        elif isinstance(body, httpx.QueryParams):
            kwargs["content"] = str(body).encode("utf-8")
        elif isinstance(body, (bytearray, memoryview)):
            kwargs["content"] = bytes(body)
        elif hasattr(body, "__aiter__"):
            # Async streams (including async file handles) go out untouched.
            kwargs["content"] = body
        elif hasattr(body, "read") and not isinstance(body, (str, bytes)):
            kwargs["content"] = body.read()
        elif hasattr(body, "__next__"):
            # AsyncClient only streams async iterators.
            kwargs["content"] = b"".join(body)
        else:
            kwargs["content"] = body
        return kwargs
