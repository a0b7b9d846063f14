"""
Core logic package.

Provides request building, response decoding and the error taxonomy.
"""

from .exceptions import ConfigurationError, CourierError, InvalidTicketError, RequestFailure
from .request_builder import ExecutionContext, build_url, prepare_request
from .response_decoder import NO_CONTENT, decode_response

__all__ = [
    "ConfigurationError",
    "CourierError",
    "InvalidTicketError",
    "RequestFailure",
    "ExecutionContext",
    "build_url",
    "prepare_request",
    "NO_CONTENT",
    "decode_response",
]
