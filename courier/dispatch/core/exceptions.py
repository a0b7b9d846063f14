"""
Custom exception classes.

Represent errors raised by the dispatch layer.
"""

from typing import List


class CourierError(Exception):
    """Base exception class for the dispatch layer."""

    pass


class ConfigurationError(CourierError):
    """Raised on caller or setup defects (missing mock, unresolvable route). Not retryable."""

    pass


class RequestFailure(CourierError):
    """Raised when a live response carries a non-2xx status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        message = f"Request failed with status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidTicketError(CourierError):
    """Raised when a ticket or download response lacks required fields."""

    def __init__(self, missing: List[str], detail: str = ""):
        self.missing = list(missing)
        self.detail = detail
        message = f"Invalid response: missing {' and '.join(self.missing)}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
