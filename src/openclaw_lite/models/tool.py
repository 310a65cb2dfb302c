# openclaw_lite/models/tool.py
"""Tool contract shared with the LLM boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ToolDefinition(BaseModel):
    """Declared to the model as an available tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_api(self) -> dict[str, Any]:
        return self.model_dump()


class ToolCall(BaseModel):
    """A tool request received from the model."""

    id: str = ""
    name: str
    input: dict[str, Any] = Field(default_factory=dict)


# Results go back into the transcript verbatim
ToolResult = str
