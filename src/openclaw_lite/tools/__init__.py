"""
Tools the model can call during a conversation.
"""

from openclaw_lite.tools.dispatcher import ToolDispatcher, ToolHandler, ToolInput, ToolSpec
from openclaw_lite.tools.reminder_tools import (
    CancelReminderInput,
    ListRemindersInput,
    ReminderTools,
    SetReminderInput,
    register_reminder_tools,
)

__all__ = [
    "CancelReminderInput",
    "ListRemindersInput",
    "ReminderTools",
    "SetReminderInput",
    "ToolDispatcher",
    "ToolHandler",
    "ToolInput",
    "ToolSpec",
    "register_reminder_tools",
]
