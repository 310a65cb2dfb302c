# openclaw_lite/tools/reminder_tools.py
"""Reminder tools exposed to the model."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from openclaw_lite.exceptions import ToolExecutionError
from openclaw_lite.reminders import ReminderRegistry, format_duration
from openclaw_lite.tools.dispatcher import ToolDispatcher, ToolInput, ToolSpec


class SetReminderInput(ToolInput):
    tool: Literal["set_reminder"] = "set_reminder"
    message: str = Field(min_length=1, description="What to remind the user about")
    minutes: int = Field(gt=0, description="Minutes from now")


class ListRemindersInput(ToolInput):
    tool: Literal["list_reminders"] = "list_reminders"


class CancelReminderInput(ToolInput):
    tool: Literal["cancel_reminder"] = "cancel_reminder"
    reminder_id: int = Field(description="Id shown when the reminder was set")


class ReminderTools:
    def __init__(self, registry: ReminderRegistry):
        self.registry = registry

    def set_reminder(self, params: SetReminderInput, chat_id: str) -> str:
        reminder = self.registry.add(chat_id, params.message, params.minutes)
        return f"Reminder #{reminder.id} set: '{params.message}' in {format_duration(params.minutes)}"

    def list_reminders(self, params: ListRemindersInput, chat_id: str) -> str:
        pending = self.registry.list_for(chat_id)
        if not pending:
            return "No pending reminders."
        now = self.registry.now()
        lines = [f"#{r.id}: {r.message} (in {format_duration(r.minutes_left(now))})" for r in pending]
        return "Pending reminders:\n" + "\n".join(lines)

    def cancel_reminder(self, params: CancelReminderInput, chat_id: str) -> str:
        if not self.registry.cancel(chat_id, params.reminder_id):
            raise ToolExecutionError("cancel_reminder", f"no pending reminder #{params.reminder_id}")
        return f"Cancelled reminder #{params.reminder_id}"

    def specs(self) -> list[ToolSpec]:
        return [
            ToolSpec(
                name="set_reminder",
                description="Set a one-time reminder that is sent to the user after the given number of minutes.",
                input_model=SetReminderInput,
                handler=self.set_reminder,
            ),
            ToolSpec(
                name="list_reminders",
                description="List the user's pending reminders.",
                input_model=ListRemindersInput,
                handler=self.list_reminders,
            ),
            ToolSpec(
                name="cancel_reminder",
                description="Cancel a pending reminder by its id.",
                input_model=CancelReminderInput,
                handler=self.cancel_reminder,
            ),
        ]


def register_reminder_tools(dispatcher: ToolDispatcher, registry: ReminderRegistry) -> ReminderTools:
    tools = ReminderTools(registry)
    for spec in tools.specs():
        dispatcher.register(spec)
    return tools
