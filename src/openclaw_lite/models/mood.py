# openclaw_lite/models/mood.py
"""Mood, resource bookkeeping and the process-wide assistant state."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from openclaw_lite.models.budget import TokenBudget

MOOD_MIN = 0.0
MOOD_MAX = 100.0


def clamp(value: float, low: float = MOOD_MIN, high: float = MOOD_MAX) -> float:
    return max(low, min(high, value))


class MoodState(BaseModel):
    """Energy, stress and curiosity, each kept within [0, 100]."""

    energy: float = Field(default=100.0, ge=MOOD_MIN, le=MOOD_MAX)
    stress: float = Field(default=0.0, ge=MOOD_MIN, le=MOOD_MAX)
    curiosity: float = Field(default=50.0, ge=MOOD_MIN, le=MOOD_MAX)

    def adjust(self, *, energy: float = 0.0, stress: float = 0.0, curiosity: float = 0.0) -> None:
        self.energy = clamp(self.energy + energy)
        self.stress = clamp(self.stress + stress)
        self.curiosity = clamp(self.curiosity + curiosity)


class RateLimitInfo(BaseModel):
    reset_at: float | None = None


class ResourceState(BaseModel):
    api_errors: int = 0
    rate_limit: RateLimitInfo = Field(default_factory=RateLimitInfo)


class AssistantState(BaseModel):
    """Everything the components share, created once at startup.

    Mutated in place from a single event loop; nothing here is locked.
    """

    mood: MoodState = Field(default_factory=MoodState)
    tokens: TokenBudget = Field(default_factory=TokenBudget)
    resources: ResourceState = Field(default_factory=ResourceState)
    idle_since: float = Field(default_factory=time.time)
    last_responses: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def create(cls, daily_token_budget: int) -> AssistantState:
        return cls(tokens=TokenBudget(budget=daily_token_budget))

    def remember_response(self, chat_id: str, text: str) -> None:
        # Re-insert so dict order tracks recency for pruning
        self.last_responses.pop(chat_id, None)
        self.last_responses[chat_id] = text

    def prune_last_responses(self, high_water: int = 100, keep: int = 50) -> int:
        if len(self.last_responses) <= high_water:
            return 0
        stale = list(self.last_responses)[:-keep]
        for chat_id in stale:
            del self.last_responses[chat_id]
        return len(stale)
