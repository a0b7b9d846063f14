"""
Local file handed to the signed upload flow.
"""

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class TransferFile:
    """A named binary payload with a declared content type."""

    name: str
    content_type: str = DEFAULT_CONTENT_TYPE
    data: Optional[bytes] = None
    path: Optional[Path] = None

    def __post_init__(self):
        if (self.data is None) == (self.path is None):
            raise ValueError("TransferFile needs exactly one of data or path")

    @classmethod
    def from_path(
        cls, path: Union[str, Path], content_type: Optional[str] = None
    ) -> "TransferFile":
        path = Path(path)
        if content_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            content_type = guessed or DEFAULT_CONTENT_TYPE
        return cls(name=path.name, content_type=content_type, path=path)

    async def read(self) -> bytes:
        """Materialize the full contents in memory."""
        if self.data is not None:
            return self.data
        return await asyncio.to_thread(self.path.read_bytes)
