# tests/conftest.py
"""
Shared pytest fixtures and configuration for openclaw_lite tests.
"""

import logging
import random
from unittest.mock import AsyncMock

import pytest

from openclaw_lite.budget import BudgetGovernor
from openclaw_lite.config import AssistantConfig
from openclaw_lite.llm import STOP_TOOL_USE, LLMResponse
from openclaw_lite.models.mood import AssistantState
from openclaw_lite.models.tool import ToolCall
from openclaw_lite.mood import MoodEngine
from openclaw_lite.reminders import ReminderRegistry
from openclaw_lite.session_store import SessionStore
from openclaw_lite.storage.file_backend import FileSessionBackend

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("openclaw_lite").setLevel(logging.DEBUG)

# 2024-03-15 12:00:00 UTC
T0 = 1_710_504_000.0


class FakeClock:
    """Settable clock returning epoch seconds."""

    def __init__(self, start: float = T0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_text_response(text: str, input_tokens: int = 100, output_tokens: int = 50) -> LLMResponse:
    return LLMResponse(
        text=text,
        stop_reason="end_turn",
        content=[{"type": "text", "text": text}],
        input_tokens=input_tokens,
        output_tokens=output_tokens,
    )


def make_tool_response(
    name: str,
    tool_input: dict | None = None,
    tool_id: str = "toolu_1",
    text: str | None = None,
    input_tokens: int = 100,
    output_tokens: int = 50,
) -> LLMResponse:
    content = []
    if text:
        content.append({"type": "text", "text": text})
    content.append({"type": "tool_use", "id": tool_id, "name": name, "input": tool_input or {}})
    return LLMResponse(
        text=text,
        tool_calls=[ToolCall(id=tool_id, name=name, input=tool_input or {})],
        stop_reason=STOP_TOOL_USE,
        content=content,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sessions_dir(tmp_path):
    return tmp_path / "sessions"


@pytest.fixture
def backend(sessions_dir):
    return FileSessionBackend(sessions_dir)


@pytest.fixture
def store(backend):
    """Session store that writes through immediately."""
    return SessionStore(backend, debounce_seconds=0)


@pytest.fixture
def state():
    return AssistantState.create(daily_token_budget=100_000)


@pytest.fixture
def config(sessions_dir):
    return AssistantConfig(api_key="test-key", sessions_dir=sessions_dir, debounce_seconds=0)


@pytest.fixture
def governor(config, state):
    return BudgetGovernor.from_config(config, state.tokens)


@pytest.fixture
def mood(state, rng, clock):
    return MoodEngine(state, rng=rng, clock=clock)


@pytest.fixture
def reminders(clock):
    return ReminderRegistry(clock=clock)


@pytest.fixture
def text_response():
    return make_text_response


@pytest.fixture
def tool_response():
    return make_tool_response


@pytest.fixture
def mock_llm():
    """LLM client whose ``create`` returns a plain text reply unless scripted."""
    llm = AsyncMock()
    llm.create.return_value = make_text_response("Hello from the model")
    return llm
