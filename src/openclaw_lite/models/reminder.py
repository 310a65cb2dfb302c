# openclaw_lite/models/reminder.py
from __future__ import annotations

import math

from pydantic import BaseModel


class Reminder(BaseModel):
    """A one-shot reminder; ``due_at``/``set_at`` are epoch seconds."""

    id: int
    chat_id: str
    message: str
    due_at: float
    set_at: float

    def minutes_left(self, now: float) -> int:
        return max(0, math.ceil((self.due_at - now) / 60))
