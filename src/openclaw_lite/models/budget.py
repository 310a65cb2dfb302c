# openclaw_lite/models/budget.py
"""Daily token budget and the per-request parameters derived from it."""

from __future__ import annotations

import time
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from openclaw_lite.base_models import DictCompatModel


def next_local_midnight(now: float | None = None) -> float:
    """Epoch seconds of the first local midnight strictly after ``now``."""
    current = datetime.fromtimestamp(time.time() if now is None else now)
    midnight = current.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
    return midnight.timestamp()


class TokenBudget(BaseModel):
    """Tokens spent today against the daily ceiling."""

    used: int = Field(default=0, ge=0)
    budget: int = Field(default=100_000, gt=0)
    reset_at: float = Field(default_factory=next_local_midnight)

    @property
    def usage_ratio(self) -> float:
        return self.used / self.budget

    @property
    def usage_percent(self) -> int:
        return round(self.usage_ratio * 100)

    def record(self, tokens: int) -> None:
        if tokens > 0:
            self.used += tokens

    def maybe_reset(self, now: float) -> bool:
        """Zero the counter if the reset instant has passed.

        The next reset is computed from ``now``, so a tick that arrives
        several days late still resets only once.
        """
        if now < self.reset_at:
            return False
        self.used = 0
        self.reset_at = next_local_midnight(now)
        return True


class BudgetAwareParams(DictCompatModel):
    """Model parameters for one request; recomputed every time."""

    model: str
    max_tokens: int
    max_history: int
    should_block: bool = False
