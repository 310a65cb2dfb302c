"""
openclaw-lite: session, budget and mood orchestration for a personal chat assistant.
"""

from openclaw_lite.assistant import Assistant, Notifier
from openclaw_lite.budget import BudgetGovernor, trim_history
from openclaw_lite.compression import CompressionPipeline
from openclaw_lite.config import AssistantConfig
from openclaw_lite.exceptions import (
    ExternalAPIError,
    OpenClawError,
    PersistenceError,
    SummarizationError,
    ToolExecutionError,
    ToolInputError,
)
from openclaw_lite.llm import AnthropicClient, LLMClient, LLMResponse
from openclaw_lite.mood import MoodEngine, MoodTier
from openclaw_lite.orchestrator import ToolOrchestrator, TurnResult
from openclaw_lite.quick_responses import QuickIntent, QuickReply, QuickResponder
from openclaw_lite.reminders import ReminderRegistry
from openclaw_lite.session_store import SessionStore

__version__ = "0.4.0"

__all__ = [
    "AnthropicClient",
    "Assistant",
    "AssistantConfig",
    "BudgetGovernor",
    "CompressionPipeline",
    "ExternalAPIError",
    "LLMClient",
    "LLMResponse",
    "MoodEngine",
    "MoodTier",
    "Notifier",
    "OpenClawError",
    "PersistenceError",
    "QuickIntent",
    "QuickReply",
    "QuickResponder",
    "ReminderRegistry",
    "SessionStore",
    "SummarizationError",
    "ToolExecutionError",
    "ToolInputError",
    "ToolOrchestrator",
    "TurnResult",
    "trim_history",
]
