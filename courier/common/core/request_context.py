"""
RequestContext management.
Use ContextVar to share the dispatch Request ID across async execution.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Optional, Tuple


# Context variable for Request ID (UUID).
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> str:
    """Set the Request ID for the current context."""
    _request_id_var.set(request_id)
    return request_id


def clear_request_id() -> None:
    """Clear the Request ID context."""
    _request_id_var.set(None)


def bind_request_id() -> Tuple[str, Token]:
    """
    Bind a new Request ID (UUID) for the duration of one operation.

    Returns the id and the token that restores the previous value via
    reset_request_id().
    """
    request_id = str(uuid.uuid4())
    return request_id, _request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    """Restore the Request ID that was bound before bind_request_id()."""
    _request_id_var.reset(token)
