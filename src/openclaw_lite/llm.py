# openclaw_lite/llm.py
"""
LLM boundary: a small protocol plus the Anthropic Messages API adapter.

Everything above this module works with :class:`LLMResponse` and
:class:`ExternalAPIError`; SDK types never leak out.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import anthropic
from pydantic import BaseModel, Field

from openclaw_lite.exceptions import ExternalAPIError
from openclaw_lite.models.tool import ToolCall

logger = logging.getLogger(__name__)

STOP_TOOL_USE = "tool_use"


class LLMResponse(BaseModel):
    """One completed API call."""

    text: str | None = None
    tool_calls: list[ToolCall] = Field(default_factory=list)
    stop_reason: str | None = None
    # Assistant content blocks, in request format, for replaying the turn
    content: list[dict[str, Any]] = Field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def wants_tool(self) -> bool:
        return self.stop_reason == STOP_TOOL_USE and bool(self.tool_calls)


@runtime_checkable
class LLMClient(Protocol):
    """Anything that can run a Messages-style request."""

    async def create(
        self,
        *,
        model: str,
        max_tokens: int,
        messages: list[dict[str, Any]],
        system: str | None = None,
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResponse: ...


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class AnthropicClient:
    """Adapter over ``anthropic.AsyncAnthropic``.

    The SDK enforces the request timeout and retries connection errors,
    408/409/429 and 5xx responses with exponential backoff, up to
    ``max_retries`` extra attempts. Whatever still fails is raised as
    :class:`ExternalAPIError`.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 60.0,
        max_retries: int = 2,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        self._client = client or anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def create(
        self,
        *,
        model: str,
        max_tokens: int,
        messages: list[dict[str, Any]],
        system: str | None = None,
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResponse:
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = tools

        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            retry_after = _parse_retry_after(e.response.headers.get("retry-after"))
            raise ExternalAPIError(
                f"{model} returned HTTP {e.status_code}: {e.message}",
                status_code=e.status_code,
                retry_after=retry_after,
            ) from e
        except anthropic.APIConnectionError as e:
            raise ExternalAPIError(f"{model} unreachable: {e}") from e

        return self._convert(response)

    @staticmethod
    def _convert(response: Any) -> LLMResponse:
        text_parts: list[str] = []
        tool_calls: list[ToolCall] = []
        content: list[dict[str, Any]] = []

        for block in response.content:
            if block.type == "text":
                text_parts.append(block.text)
                content.append({"type": "text", "text": block.text})
            elif block.type == "tool_use":
                tool_input = block.input if isinstance(block.input, dict) else {}
                tool_calls.append(ToolCall(id=block.id, name=block.name, input=tool_input))
                content.append(
                    {
                        "type": "tool_use",
                        "id": block.id,
                        "name": block.name,
                        "input": tool_input,
                    }
                )

        usage = getattr(response, "usage", None)
        return LLMResponse(
            text="\n".join(text_parts) if text_parts else None,
            tool_calls=tool_calls,
            stop_reason=response.stop_reason,
            content=content,
            input_tokens=getattr(usage, "input_tokens", 0) or 0,
            output_tokens=getattr(usage, "output_tokens", 0) or 0,
        )
