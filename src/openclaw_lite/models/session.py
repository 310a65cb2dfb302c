# openclaw_lite/models/session.py
"""Conversation session models and their on-disk record shape.

The record format is camelCase JSON::

    {"messages": [{"role": "user", "content": "hi", "timestamp": 1700000000000}],
     "lastActivity": 1700000000000,
     "conversationSummary": "..."}

Timestamps are integer milliseconds since the epoch.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from openclaw_lite.base_models import DictCompatModel
from openclaw_lite.models.message_role import MessageRole


def now_ms() -> int:
    return int(time.time() * 1000)


class Message(BaseModel):
    """A single stored turn."""

    role: MessageRole
    content: str
    timestamp: int = Field(default_factory=now_ms)

    def as_llm_message(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class Session(BaseModel):
    """Per-conversation history, owned by the session store."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[Message] = Field(default_factory=list)
    last_activity: int = Field(default_factory=now_ms, alias="lastActivity")
    conversation_summary: str | None = Field(default=None, alias="conversationSummary")

    def to_record(self) -> str:
        """Compact JSON for the backing file."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, data: str) -> Session:
        return cls.model_validate_json(data)

    def trim(self, max_history: int) -> int:
        """Drop the oldest messages beyond ``max_history``; returns how many."""
        excess = len(self.messages) - max_history
        if excess <= 0:
            return 0
        del self.messages[:excess]
        return excess


class CompressedView(DictCompatModel):
    """What the LLM sees: the running summary plus the retained turns."""

    summary: str | None = None
    messages: list[dict[str, str]] = Field(default_factory=list)
