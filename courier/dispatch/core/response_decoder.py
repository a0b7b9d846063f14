"""
Response decoder.

Converts a completed httpx.Response into a structured payload, raw text,
or NO_CONTENT, raising RequestFailure for non-2xx statuses.
"""

from typing import Any

import httpx

from .exceptions import RequestFailure


class _NoContent:
    """Explicit absent value for 204 responses, distinct from JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_CONTENT"


NO_CONTENT = _NoContent()


def _read_error_text(response: httpx.Response) -> str:
    # The body of a failed response is informational only.
    try:
        return response.text
    except Exception:
        return ""


def decode_response(response: httpx.Response) -> Any:
    if not response.is_success:
        raise RequestFailure(response.status_code, _read_error_text(response))

    if response.status_code == 204:
        return NO_CONTENT

    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return response.json()

    return response.text
