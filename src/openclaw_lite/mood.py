# openclaw_lite/mood.py
"""
Mood engine: the rules that move energy, stress and curiosity.

State lives in :class:`AssistantState`; this module only mutates it.

Per tick:
- energy +2, stress -1, curiosity drifts by up to +/-2.5
- a daily budget reset relieves 20 stress
- budget pressure adds stress (+2 above 90% usage, +1 above 75%)

Per event:
- LLM exchange: energy -1..-10 scaled by tokens spent
- quick response: energy -1
- API error: stress +15, plus 20 more when rate limited
- unhandled processing error: stress +10
- cooldown message shown: stress -10
- first message after 5+ idle minutes: curiosity +10
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Callable
from enum import Enum

from openclaw_lite.exceptions import ExternalAPIError
from openclaw_lite.models.mood import AssistantState, MoodState

logger = logging.getLogger(__name__)

TICK_ENERGY_RECOVERY = 2.0
TICK_STRESS_DECAY = 1.0
CURIOSITY_DRIFT = 2.5

BUDGET_RESET_RELIEF = 20.0
BUDGET_PRESSURE_HIGH = 0.9
BUDGET_PRESSURE_MEDIUM = 0.75

TOKENS_PER_ENERGY_POINT = 500
MAX_EXCHANGE_ENERGY_COST = 10
QUICK_RESPONSE_ENERGY_COST = 1.0

API_ERROR_STRESS = 15.0
RATE_LIMIT_STRESS = 20.0
PROCESSING_ERROR_STRESS = 10.0
COOLDOWN_RELIEF = 10.0

IDLE_CURIOSITY_BOOST = 10.0

# Tier thresholds used for mood-aware replies
LOW_ENERGY = 30.0
HIGH_STRESS = 50.0
HIGH_CURIOSITY = 80.0
COOLDOWN_STRESS = 80.0

YAWN_PREFIXES = ["*yawn* ", "*stretches* ", "*blinks sleepily* "]
FOLLOW_UPS = [
    "\n\nCurious - what made you think of that?",
    "\n\nInteresting! Want to tell me more?",
    "\n\nThat's got me thinking... anything else on your mind?",
]


class MoodTier(str, Enum):
    LOW_ENERGY = "low_energy"
    HIGH_STRESS = "high_stress"
    HIGH_CURIOSITY = "high_curiosity"
    NORMAL = "normal"


class MoodEngine:
    def __init__(
        self,
        state: AssistantState,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        idle_curiosity_seconds: float = 300.0,
    ):
        self.state = state
        self.rng = rng or random.Random()
        self._clock = clock
        self.idle_curiosity_seconds = idle_curiosity_seconds

    @property
    def mood(self) -> MoodState:
        return self.state.mood

    def tier(self) -> MoodTier:
        """Dominant mood, checked in priority order."""
        if self.mood.energy < LOW_ENERGY:
            return MoodTier.LOW_ENERGY
        if self.mood.stress > HIGH_STRESS:
            return MoodTier.HIGH_STRESS
        if self.mood.curiosity > HIGH_CURIOSITY:
            return MoodTier.HIGH_CURIOSITY
        return MoodTier.NORMAL

    @property
    def needs_cooldown(self) -> bool:
        return self.mood.stress >= COOLDOWN_STRESS

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def tick(self, now: float | None = None) -> bool:
        """Apply one tick of regulation. Returns True if the budget reset."""
        now = self._clock() if now is None else now
        drift = (self.rng.random() - 0.5) * 2 * CURIOSITY_DRIFT
        self.mood.adjust(energy=TICK_ENERGY_RECOVERY, stress=-TICK_STRESS_DECAY, curiosity=drift)

        tokens = self.state.tokens
        reset = tokens.maybe_reset(now)
        if reset:
            logger.info("Token budget reset at midnight")
            self.mood.adjust(stress=-BUDGET_RESET_RELIEF)

        usage = tokens.usage_ratio
        if usage > BUDGET_PRESSURE_HIGH:
            self.mood.adjust(stress=2.0)
        elif usage > BUDGET_PRESSURE_MEDIUM:
            self.mood.adjust(stress=1.0)
        return reset

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def record_exchange(self, total_tokens: int) -> int:
        cost = min(MAX_EXCHANGE_ENERGY_COST, max(1, math.ceil(total_tokens / TOKENS_PER_ENERGY_POINT)))
        self.mood.adjust(energy=-cost)
        self.state.resources.api_errors = 0
        return cost

    def record_quick_response(self) -> None:
        self.mood.adjust(energy=-QUICK_RESPONSE_ENERGY_COST)

    def record_api_error(self, error: ExternalAPIError, now: float | None = None) -> None:
        resources = self.state.resources
        resources.api_errors += 1
        self.mood.adjust(stress=API_ERROR_STRESS)
        if error.is_rate_limited:
            if error.retry_after is not None:
                now = self._clock() if now is None else now
                resources.rate_limit.reset_at = now + error.retry_after
            self.mood.adjust(stress=RATE_LIMIT_STRESS)
        logger.warning(
            f"API error #{resources.api_errors} (status={error.status_code}), stress now {self.mood.stress:.0f}"
        )

    def record_processing_error(self) -> None:
        self.mood.adjust(stress=PROCESSING_ERROR_STRESS)

    def cool_down(self) -> None:
        self.mood.adjust(stress=-COOLDOWN_RELIEF)

    def note_activity(self, now: float | None = None) -> bool:
        """Mark an exchange; long idle gaps make the assistant curious."""
        now = self._clock() if now is None else now
        was_idle = now - self.state.idle_since > self.idle_curiosity_seconds
        if was_idle:
            self.mood.adjust(curiosity=IDLE_CURIOSITY_BOOST)
        self.state.idle_since = now
        return was_idle

    # ------------------------------------------------------------------
    # Tone
    # ------------------------------------------------------------------

    def decorate(self, text: str) -> str:
        """Occasionally colour a reply with the current mood."""
        if self.mood.energy < LOW_ENERGY and self.rng.random() < 0.3:
            text = self.rng.choice(YAWN_PREFIXES) + text
        if self.mood.curiosity > HIGH_CURIOSITY and self.rng.random() < 0.2 and "?" not in text:
            text += self.rng.choice(FOLLOW_UPS)
        return text
