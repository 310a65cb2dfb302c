# openclaw_lite/models/attachment.py
"""Media sent alongside a user message."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class AttachmentKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"
    TEXT = "text"


class Attachment(BaseModel):
    """An image or document; ``data`` is base64 except for plain text."""

    kind: AttachmentKind
    data: str
    media_type: str = "image/jpeg"
    file_name: str | None = None

    def to_block(self) -> dict[str, Any]:
        """Content block in Messages API request format."""
        if self.kind == AttachmentKind.IMAGE:
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": self.media_type, "data": self.data},
            }
        if self.kind == AttachmentKind.PDF:
            source = {"type": "base64", "media_type": "application/pdf", "data": self.data}
        else:
            source = {"type": "text", "media_type": "text/plain", "data": self.data}
        block: dict[str, Any] = {"type": "document", "source": source}
        if self.file_name:
            block["title"] = self.file_name
        return block

    def default_prompt(self) -> str:
        if self.kind == AttachmentKind.IMAGE:
            return "What's in this image?"
        return f'I\'ve shared a file: "{self.file_name or "document"}". Please review it.'

    def history_text(self, text: str) -> str:
        """Text stored in the session in place of the media itself."""
        if self.kind == AttachmentKind.IMAGE:
            return text or "[Image]"
        return f"[Document: {self.file_name or 'document'}] {text}".rstrip()
