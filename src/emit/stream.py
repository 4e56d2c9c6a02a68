"""In-memory output stream tagged with its formats."""

from __future__ import annotations

import io

from core.types import FileType


class SiftStream(io.BytesIO):
    """Readable, seekable handle over emitted bytes.

    Attributes:
        format: Format of the emitted bytes.
        original_format: Declared input type, including compression.
    """

    def __init__(self, payload: bytes, output_format: FileType, original_format: FileType) -> None:
        super().__init__(payload)
        self.format = output_format
        self.original_format = original_format

    def read_text(self) -> str:
        """Return the whole payload decoded as UTF-8, leaving the position unchanged."""
        return self.getvalue().decode("utf-8")

    def __repr__(self) -> str:
        return f"SiftStream(format={self.format}, original_format={self.original_format}, size={len(self.getvalue())})"
