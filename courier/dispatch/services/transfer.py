"""
Signed-transfer orchestrator.

Implements the ticket-then-transfer protocol against object storage:
a ticket endpoint issues a short-lived signed URL, the file bytes are
PUT to it, and the storage path is handed back to the caller.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..core.exceptions import InvalidTicketError
from ..core.response_decoder import NO_CONTENT
from ..models.request import RequestOptions
from ..models.ticket import SignedTransferTicket, resolve_ticket_fields
from ..models.transfer_file import TransferFile
from .gate import DispatchGate

logger = logging.getLogger("courier.transfer")

DEFAULT_UPLOAD_TICKET: Dict[str, str] = {
    "file_path": "/uploads/example-file.txt",
    "file_url": "https://www.example.com/your-bucket/uploads/example-file.txt",
}

DEFAULT_DOWNLOAD_RESPONSE: Dict[str, str] = {
    "file_url": "https://www.example.com/your-bucket/uploads/example-file.txt",
}


class SignedTransferOrchestrator:
    def __init__(self, gate: DispatchGate):
        self.gate = gate

    async def upload_file(
        self,
        route: str,
        file: TransferFile,
        options: Optional[Mapping[str, Any]] = None,
        mock_ticket: Any = DEFAULT_UPLOAD_TICKET,
    ) -> str:
        """
        Request an upload ticket, PUT the file to the signed URL and return its storage path.

        Args:
            route: Endpoint that issues the ticket (signed URL + storage path).
            file: File whose contents are uploaded.
            options: Query parameters forwarded to the ticket endpoint (metadata, ACL, ...).
            mock_ticket: Ticket returned by the gate in demo mode.

        Raises:
            InvalidTicketError: the ticket lacks a signed URL or a storage path.
        """
        payload = await self.gate.dispatch(
            route, RequestOptions(method="GET", query=options), mock_ticket
        )

        ticket = SignedTransferTicket.parse_payload(payload)
        signed_url, storage_path = resolve_ticket_fields(ticket)
        missing = []
        if not signed_url:
            missing.append("signed URL")
        if not storage_path:
            missing.append("file path")
        if missing:
            raise InvalidTicketError(missing)

        content = await file.read()
        logger.debug(
            "Uploading %s (%d bytes) to %s",
            file.name,
            len(content),
            storage_path,
            extra={"content_type": file.content_type},
        )
        await self.gate.dispatch(
            signed_url,
            RequestOptions(
                method="PUT",
                headers={"Content-Type": file.content_type},
                body=content,
            ),
            NO_CONTENT,
        )
        return storage_path

    async def get_download_url(
        self,
        file_path: str,
        route: str,
        options: Optional[Mapping[str, Any]] = None,
        mock_response: Any = DEFAULT_DOWNLOAD_RESPONSE,
    ) -> str:
        """
        Request a time-limited download URL for a stored file.

        The link is not tracked; callers must use it before it expires.

        Raises:
            InvalidTicketError: the response lacks a file URL.
        """
        query = {**(options or {}), "file_path": file_path}
        payload = await self.gate.dispatch(
            route, RequestOptions(method="GET", query=query), mock_response
        )

        signed_url, _ = resolve_ticket_fields(SignedTransferTicket.parse_payload(payload))
        if not signed_url:
            raise InvalidTicketError(["file URL"])
        return signed_url


async def upload_file(
    gate: DispatchGate,
    route: str,
    file: TransferFile,
    options: Optional[Mapping[str, Any]] = None,
    mock_ticket: Any = DEFAULT_UPLOAD_TICKET,
) -> str:
    return await SignedTransferOrchestrator(gate).upload_file(route, file, options, mock_ticket)


async def get_download_url(
    gate: DispatchGate,
    file_path: str,
    route: str,
    options: Optional[Mapping[str, Any]] = None,
    mock_response: Any = DEFAULT_DOWNLOAD_RESPONSE,
) -> str:
    return await SignedTransferOrchestrator(gate).get_download_url(
        file_path, route, options, mock_response
    )
