# openclaw_lite/reminders.py
"""In-memory reminder registry. Reminders do not survive a restart."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from openclaw_lite.models.reminder import Reminder

logger = logging.getLogger(__name__)


def format_duration(minutes: int) -> str:
    if minutes >= 60:
        hours, mins = divmod(minutes, 60)
        if mins:
            return f"{hours}h {mins}m"
        return f"{hours} hour{'s' if hours != 1 else ''}"
    return f"{minutes} minute{'s' if minutes != 1 else ''}"


class ReminderRegistry:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._next_id = 1
        self._pending: list[Reminder] = []

    def now(self) -> float:
        return self._clock()

    def __len__(self) -> int:
        return len(self._pending)

    def add(self, chat_id: str, message: str, minutes: float) -> Reminder:
        now = self._clock()
        reminder = Reminder(
            id=self._next_id,
            chat_id=chat_id,
            message=message,
            due_at=now + minutes * 60,
            set_at=now,
        )
        self._next_id += 1
        self._pending.append(reminder)
        logger.info(f"Reminder #{reminder.id} set for {chat_id} in {minutes}min")
        return reminder

    def list_for(self, chat_id: str) -> list[Reminder]:
        return [r for r in self._pending if r.chat_id == chat_id]

    def cancel(self, chat_id: str, reminder_id: int) -> bool:
        for i, reminder in enumerate(self._pending):
            if reminder.chat_id == chat_id and reminder.id == reminder_id:
                del self._pending[i]
                return True
        return False

    def pop_due(self, now: float | None = None) -> list[Reminder]:
        """Remove and return every reminder due at ``now``."""
        now = self._clock() if now is None else now
        due = [r for r in self._pending if r.due_at <= now]
        if due:
            self._pending = [r for r in self._pending if r.due_at > now]
        return due
