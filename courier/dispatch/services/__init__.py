"""
Services package.

Provides the dispatch gate and the signed-transfer orchestrator.
"""

from .gate import DEMO_DELAY_SECONDS, MISSING, DispatchGate
from .transfer import SignedTransferOrchestrator, get_download_url, upload_file

__all__ = [
    "DEMO_DELAY_SECONDS",
    "MISSING",
    "DispatchGate",
    "SignedTransferOrchestrator",
    "get_download_url",
    "upload_file",
]
