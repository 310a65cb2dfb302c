# openclaw_lite/orchestrator.py
"""
Tool orchestrator: one user turn, possibly several model calls.

The model sees the compressed history plus the new user turn. While it
stops for tool use, exactly one requested tool is executed per round, the
assistant turn and the tool result are appended to the round transcript, and
the model is called again. After ``max_tool_rounds`` executions the loop
stops and the best text seen so far is returned. Every call is billed to the
budget as soon as it completes.

Nothing written here touches the stored session; the caller appends the
final reply.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field

from openclaw_lite import replies
from openclaw_lite.base_models import DictCompatModel
from openclaw_lite.budget import BudgetGovernor, trim_history
from openclaw_lite.llm import LLMClient, LLMResponse
from openclaw_lite.models.attachment import Attachment
from openclaw_lite.models.budget import BudgetAwareParams
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.session_store import SessionStore
from openclaw_lite.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 15
SUMMARY_HEADING = "## Earlier in this conversation"


class TurnResult(DictCompatModel):
    """Outcome of :meth:`ToolOrchestrator.converse`."""

    text: str
    model: str
    calls: int = 0
    tool_rounds: int = 0
    tools_used: list[str] = Field(default_factory=list)
    total_tokens: int = 0
    hit_round_cap: bool = False


def replay_content(response: LLMResponse, tool_use_id: str) -> list[dict[str, Any]]:
    """Assistant content to replay: text plus the one tool call being answered."""
    return [
        block
        for block in response.content
        if block.get("type") != "tool_use" or block.get("id") == tool_use_id
    ]


class ToolOrchestrator:
    def __init__(
        self,
        store: SessionStore,
        llm: LLMClient,
        governor: BudgetGovernor,
        dispatcher: ToolDispatcher,
        *,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
    ):
        self.store = store
        self.llm = llm
        self.governor = governor
        self.dispatcher = dispatcher
        self.max_tool_rounds = max_tool_rounds

    def build_system_prompt(self, system_prompt: str, summary: str | None) -> str:
        if not summary:
            return system_prompt
        return f"{system_prompt}\n\n{SUMMARY_HEADING}\n{summary}".lstrip()

    def build_messages(
        self,
        chat_id: str,
        user_content: str,
        params: BudgetAwareParams,
        attachments: list[Attachment] | None = None,
    ) -> tuple[list[dict[str, Any]], str | None]:
        """History from the store plus the current turn, trimmed to the tier.

        The current turn is normally already stored as text; it is dropped
        from the history and re-sent with its attachments.
        """
        view = self.store.get_compressed_view(chat_id)
        history = list(view.messages)
        if history and history[-1]["role"] == MessageRole.USER.value:
            history = history[:-1]

        if attachments:
            content: Any = [a.to_block() for a in attachments]
            content.append({"type": "text", "text": user_content or attachments[0].default_prompt()})
        else:
            content = user_content

        messages = [*history, {"role": MessageRole.USER.value, "content": content}]
        return trim_history(messages, params.max_history), view.summary

    async def converse(
        self,
        chat_id: str,
        user_content: str,
        params: BudgetAwareParams,
        system_prompt: str = "",
        attachments: list[Attachment] | None = None,
    ) -> TurnResult:
        """Run the model/tool loop for one turn.

        ``ExternalAPIError`` from the model propagates; tool failures never do.
        """
        messages, summary = self.build_messages(chat_id, user_content, params, attachments)
        system = self.build_system_prompt(system_prompt, summary)
        tools = [d.to_api() for d in self.dispatcher.definitions()] or None

        result = TurnResult(text="", model=params.model)
        best_text: str | None = None

        response = await self._call(params, system, messages, tools, result, label="api")
        best_text = _pick_text(response, best_text)

        while response.wants_tool and result.tool_rounds < self.max_tool_rounds:
            result.tool_rounds += 1
            call = response.tool_calls[0]
            if len(response.tool_calls) > 1:
                logger.debug(f"Model requested {len(response.tool_calls)} tools, running only {call.name}")

            output = await self.dispatcher.execute(call, chat_id)
            result.tools_used.append(call.name)

            messages.append({"role": MessageRole.ASSISTANT.value, "content": replay_content(response, call.id)})
            messages.append(
                {
                    "role": MessageRole.USER.value,
                    "content": [{"type": "tool_result", "tool_use_id": call.id, "content": output}],
                }
            )

            response = await self._call(
                params, system, messages, tools, result, label=f"tool-round:{result.tool_rounds}"
            )
            best_text = _pick_text(response, best_text)

        if response.wants_tool:
            result.hit_round_cap = True
            logger.warning(f"Tool round cap ({self.max_tool_rounds}) reached for {chat_id}")
            result.text = best_text or replies.TOOL_ROUNDS_EXHAUSTED
        else:
            result.text = best_text or replies.EMPTY_REPLY
        return result

    async def _call(
        self,
        params: BudgetAwareParams,
        system: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None,
        result: TurnResult,
        label: str,
    ) -> LLMResponse:
        response = await self.llm.create(
            model=params.model,
            max_tokens=params.max_tokens,
            system=system or None,
            messages=list(messages),
            tools=tools,
        )
        result.calls += 1
        result.total_tokens += response.total_tokens
        self.governor.record_usage(response.total_tokens, label=f"{label} {params.model}")
        return response


def _pick_text(response: LLMResponse, current: str | None) -> str | None:
    text = (response.text or "").strip()
    return text or current
