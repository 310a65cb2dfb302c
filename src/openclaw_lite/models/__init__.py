"""
Core models for the assistant.
"""

from openclaw_lite.models.attachment import Attachment, AttachmentKind
from openclaw_lite.models.budget import BudgetAwareParams, TokenBudget, next_local_midnight
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.models.mood import AssistantState, MoodState, RateLimitInfo, ResourceState
from openclaw_lite.models.reminder import Reminder
from openclaw_lite.models.session import CompressedView, Message, Session, now_ms
from openclaw_lite.models.tool import ToolCall, ToolDefinition, ToolResult

__all__ = [
    "AssistantState",
    "Attachment",
    "AttachmentKind",
    "BudgetAwareParams",
    "CompressedView",
    "Message",
    "MessageRole",
    "MoodState",
    "RateLimitInfo",
    "Reminder",
    "ResourceState",
    "Session",
    "TokenBudget",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
    "next_local_midnight",
    "now_ms",
]
