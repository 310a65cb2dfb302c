# openclaw_lite/models/message_role.py
from __future__ import annotations

from enum import Enum


class MessageRole(str, Enum):
    """Who produced a stored conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
