"""
Data model definitions package.
"""

from .environment import AppEnv
from .request import MultipartForm, RequestDescriptor, RequestOptions
from .ticket import SignedTransferTicket, resolve_ticket_fields
from .transfer_file import TransferFile

__all__ = [
    "AppEnv",
    "MultipartForm",
    "RequestDescriptor",
    "RequestOptions",
    "SignedTransferTicket",
    "resolve_ticket_fields",
    "TransferFile",
]
