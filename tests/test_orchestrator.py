# tests/test_orchestrator.py
"""
Tests for the tool orchestrator.

Covers:
- Request construction (history, current turn, summary in system prompt)
- Tier history limit applied to the outgoing context
- Attachments sent as content blocks
- One tool executed per round, transcript replay
- Round cap termination with non-empty text
- Per-call billing
- API errors propagate
"""

import pytest

from openclaw_lite import replies
from openclaw_lite.exceptions import ExternalAPIError
from openclaw_lite.models.attachment import Attachment, AttachmentKind
from openclaw_lite.models.budget import BudgetAwareParams
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.orchestrator import SUMMARY_HEADING, ToolOrchestrator, replay_content
from openclaw_lite.tools import ToolDispatcher, register_reminder_tools

PARAMS = BudgetAwareParams(model="smart-model", max_tokens=1024, max_history=50)


@pytest.fixture
def dispatcher(reminders):
    dispatcher = ToolDispatcher()
    register_reminder_tools(dispatcher, reminders)
    return dispatcher


@pytest.fixture
def orchestrator(store, mock_llm, governor, dispatcher):
    return ToolOrchestrator(store, mock_llm, governor, dispatcher, max_tool_rounds=15)


def _user_turn(store, chat_id: str, text: str) -> None:
    store.append(chat_id, MessageRole.USER, text)


class TestRequest:
    async def test_plain_turn(self, orchestrator, store, mock_llm):
        store.append("chat", MessageRole.USER, "earlier question")
        store.append("chat", MessageRole.ASSISTANT, "earlier answer")
        _user_turn(store, "chat", "new question")

        result = await orchestrator.converse("chat", "new question", PARAMS, system_prompt="Be nice.")

        assert result.text == "Hello from the model"
        assert result.calls == 1
        kwargs = mock_llm.create.call_args.kwargs
        assert kwargs["model"] == "smart-model"
        assert kwargs["max_tokens"] == 1024
        assert kwargs["system"] == "Be nice."
        assert kwargs["messages"] == [
            {"role": "user", "content": "earlier question"},
            {"role": "assistant", "content": "earlier answer"},
            {"role": "user", "content": "new question"},
        ]
        assert {t["name"] for t in kwargs["tools"]} == {"set_reminder", "list_reminders", "cancel_reminder"}

    async def test_summary_goes_to_system_prompt(self, orchestrator, store, mock_llm):
        _user_turn(store, "chat", "hello")
        store.load("chat").conversation_summary = "They like cats."

        await orchestrator.converse("chat", "hello", PARAMS, system_prompt="Be nice.")

        assert mock_llm.create.call_args.kwargs["system"] == f"Be nice.\n\n{SUMMARY_HEADING}\nThey like cats."

    async def test_history_limited_by_tier(self, orchestrator, store, mock_llm):
        for i in range(20):
            role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
            store.append("chat", role, f"m{i}")
        _user_turn(store, "chat", "latest")

        params = BudgetAwareParams(model="fallback", max_tokens=500, max_history=5)
        await orchestrator.converse("chat", "latest", params)

        messages = mock_llm.create.call_args.kwargs["messages"]
        assert len(messages) <= 5
        assert messages[0]["role"] == "user"
        assert messages[-1] == {"role": "user", "content": "latest"}

    async def test_attachments_become_blocks(self, orchestrator, store, mock_llm):
        _user_turn(store, "chat", "[Image]")
        image = Attachment(kind=AttachmentKind.IMAGE, data="aGVsbG8=", media_type="image/png")

        await orchestrator.converse("chat", "", PARAMS, attachments=[image])

        content = mock_llm.create.call_args.kwargs["messages"][-1]["content"]
        assert content[0] == {
            "type": "image",
            "source": {"type": "base64", "media_type": "image/png", "data": "aGVsbG8="},
        }
        assert content[1] == {"type": "text", "text": "What's in this image?"}

    async def test_no_tools_registered(self, store, mock_llm, governor):
        orchestrator = ToolOrchestrator(store, mock_llm, governor, ToolDispatcher())
        _user_turn(store, "chat", "hi there")
        await orchestrator.converse("chat", "hi there", PARAMS)
        assert mock_llm.create.call_args.kwargs["tools"] is None


class TestToolLoop:
    async def test_tool_round(self, orchestrator, store, mock_llm, reminders, text_response, tool_response):
        _user_turn(store, "chat", "remind me to drink water in 20 minutes")
        mock_llm.create.side_effect = [
            tool_response("set_reminder", {"message": "drink water", "minutes": 20}, text="On it."),
            text_response("Done! I'll remind you in 20 minutes."),
        ]

        result = await orchestrator.converse("chat", "remind me to drink water in 20 minutes", PARAMS)

        assert result.text == "Done! I'll remind you in 20 minutes."
        assert result.tool_rounds == 1
        assert result.tools_used == ["set_reminder"]
        assert len(reminders) == 1

        second = mock_llm.create.call_args_list[1].kwargs["messages"]
        assert second[-2]["role"] == "assistant"
        assert second[-2]["content"][-1]["type"] == "tool_use"
        tool_result = second[-1]["content"][0]
        assert tool_result["type"] == "tool_result"
        assert tool_result["tool_use_id"] == "toolu_1"
        assert "drink water" in tool_result["content"]

    async def test_one_tool_per_round(self, orchestrator, store, mock_llm, reminders, text_response, tool_response):
        _user_turn(store, "chat", "two things")
        first = tool_response("set_reminder", {"message": "a", "minutes": 1}, tool_id="t1")
        extra = tool_response("set_reminder", {"message": "b", "minutes": 2}, tool_id="t2")
        first.tool_calls.extend(extra.tool_calls)
        first.content.extend(extra.content)
        mock_llm.create.side_effect = [first, text_response("ok")]

        await orchestrator.converse("chat", "two things", PARAMS)

        assert [r.message for r in reminders.list_for("chat")] == ["a"]
        replayed = mock_llm.create.call_args_list[1].kwargs["messages"][-2]["content"]
        assert [b["id"] for b in replayed if b["type"] == "tool_use"] == ["t1"]

    async def test_round_cap(self, store, mock_llm, governor, dispatcher, tool_response):
        orchestrator = ToolOrchestrator(store, mock_llm, governor, dispatcher, max_tool_rounds=3)
        _user_turn(store, "chat", "loop forever")
        mock_llm.create.return_value = tool_response("list_reminders")

        result = await orchestrator.converse("chat", "loop forever", PARAMS)

        assert result.hit_round_cap is True
        assert result.tool_rounds == 3
        assert mock_llm.create.call_count == 4
        assert result.text == replies.TOOL_ROUNDS_EXHAUSTED

    async def test_round_cap_keeps_best_text(self, store, mock_llm, governor, dispatcher, tool_response):
        orchestrator = ToolOrchestrator(store, mock_llm, governor, dispatcher, max_tool_rounds=2)
        _user_turn(store, "chat", "loop")
        mock_llm.create.return_value = tool_response("list_reminders", text="Checking your reminders...")

        result = await orchestrator.converse("chat", "loop", PARAMS)

        assert result.text == "Checking your reminders..."

    async def test_every_call_billed(self, orchestrator, store, mock_llm, state, text_response, tool_response):
        _user_turn(store, "chat", "hi")
        mock_llm.create.side_effect = [
            tool_response("list_reminders", input_tokens=300, output_tokens=20),
            text_response("none", input_tokens=400, output_tokens=10),
        ]

        result = await orchestrator.converse("chat", "hi", PARAMS)

        assert result.total_tokens == 730
        assert state.tokens.used == 730

    async def test_empty_reply_gets_fallback_text(self, orchestrator, store, mock_llm, text_response):
        _user_turn(store, "chat", "hmm")
        mock_llm.create.return_value = text_response("")
        result = await orchestrator.converse("chat", "hmm", PARAMS)
        assert result.text == replies.EMPTY_REPLY

    async def test_api_error_propagates(self, orchestrator, store, mock_llm):
        _user_turn(store, "chat", "hi")
        mock_llm.create.side_effect = ExternalAPIError("down", status_code=503)
        with pytest.raises(ExternalAPIError):
            await orchestrator.converse("chat", "hi", PARAMS)


class TestReplayContent:
    def test_keeps_text_and_answered_call(self, tool_response):
        response = tool_response("list_reminders", tool_id="a", text="thinking")
        response.content.append({"type": "tool_use", "id": "b", "name": "x", "input": {}})
        assert replay_content(response, "a") == [
            {"type": "text", "text": "thinking"},
            {"type": "tool_use", "id": "a", "name": "list_reminders", "input": {}},
        ]
