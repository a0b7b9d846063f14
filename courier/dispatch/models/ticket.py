"""
Signed transfer ticket models.

The ticket-issuing endpoint answers with either the primary field pair
(`file_path`, `file_url`) or the legacy alias pair (`path`, `url`).
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.exceptions import InvalidTicketError


class SignedTransferTicket(BaseModel):
    """Response of a ticket-issuing or download-link endpoint."""

    model_config = ConfigDict(extra="ignore")

    file_path: Optional[str] = None
    file_url: Optional[str] = None
    path: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def parse_payload(cls, payload: Any) -> "SignedTransferTicket":
        if not isinstance(payload, dict):
            raise InvalidTicketError(
                ["file_url", "file_path"], f"expected a JSON object, got {type(payload).__name__}"
            )
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise InvalidTicketError(["file_url", "file_path"], str(exc)) from exc


def resolve_ticket_fields(ticket: SignedTransferTicket) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolve (url, path) from a ticket.

    The primary field wins over its alias; empty strings count as absent.
    """
    url = ticket.file_url or ticket.url or None
    path = ticket.file_path or ticket.path or None
    return url, path
