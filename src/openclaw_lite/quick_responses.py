# openclaw_lite/quick_responses.py
"""
Quick responses: deterministic answers that never touch the LLM.

The table is ordered; the first intent whose pattern matches gets to
respond. A responder may return ``None`` to let later intents try (used by
the reminder parsers, which fall through to the help text when the time
cannot be parsed).

Two overrides run before the table:

- budget exhausted (usage >= 100%): only the table may answer, otherwise the
  canonical exhausted message is returned
- high stress (>= 80): the cooldown message is returned and stress relieved,
  the table is not consulted
"""

from __future__ import annotations

import logging
import math
import random
import re
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel

from openclaw_lite import replies
from openclaw_lite.models.mood import AssistantState
from openclaw_lite.mood import MoodEngine, MoodTier
from openclaw_lite.reminders import ReminderRegistry, format_duration

logger = logging.getLogger(__name__)


class QuickIntent(str, Enum):
    GREETING = "greeting"
    THANKS = "thanks"
    TIME = "time"
    DATE = "date"
    HOW_ARE_YOU = "how_are_you"
    REPEAT_LAST = "repeat_last"
    REMIND_IN = "remind_in"
    REMIND_AT = "remind_at"
    REMIND_HELP = "remind_help"
    # Overrides, not table entries
    BUDGET_EXHAUSTED = "budget_exhausted"
    COOLDOWN = "cooldown"


GREETING_RESPONSES = [
    "Hey there! 🦞",
    "Hi! What's up?",
    "Hello! How can I help?",
    "Hey! 👋",
]

THANKS_RESPONSES = [
    "You're welcome!",
    "No problem! 🦞",
    "Happy to help!",
    "Anytime!",
]

HOW_ARE_YOU_RESPONSES: dict[MoodTier, list[str]] = {
    MoodTier.LOW_ENERGY: [
        "*yawn* A bit tired, but here for you!",
        "Running on low battery today... but still kicking! 🦞",
        "Feeling a bit sleepy, but ready to help.",
    ],
    MoodTier.HIGH_STRESS: [
        "Bit overwhelmed right now, but managing!",
        "Been busy! Taking a breath... 🦞",
        "A lot going on, but I'm here.",
    ],
    MoodTier.HIGH_CURIOSITY: [
        "Feeling curious and ready to explore! What's on your mind?",
        "Great! Been thinking about interesting stuff. What about you?",
        "Excited to chat! 🦞 What's up?",
    ],
    MoodTier.NORMAL: [
        "Doing well! How can I help? 🦞",
        "Good! What's on your mind?",
        "All good here! What can I do for you?",
    ],
}

REMINDER_HELP = """I can help with reminders! Try:
• "remind me in 30 min to call mom"
• "remind me at 3pm to check oven"
• "what reminders do I have?" (ask me normally)"""

_REMIND_IN = re.compile(r"remind\s+me\s+in\s+(\d+)\s*(min(?:ute)?s?|hour?s?|hr?s?)\s+(?:to\s+)?(.+)", re.IGNORECASE)
_REMIND_AT = re.compile(r"remind\s+me\s+at\s+(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\s+(?:to\s+)?(.+)", re.IGNORECASE)


def parse_reminder_in(text: str) -> tuple[int, str] | None:
    """``remind me in 30 min to call mom`` -> (30, "call mom")."""
    match = _REMIND_IN.search(text)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2).lower()
    minutes = amount * 60 if unit.startswith("h") else amount
    return minutes, match.group(3).strip()


def parse_reminder_at(text: str, now: datetime) -> tuple[int, str, str] | None:
    """``remind me at 3pm to check oven`` -> (minutes until then, task, "15:00").

    Times already past today roll over to tomorrow.
    """
    match = _REMIND_AT.search(text)
    if not match:
        return None

    hours = int(match.group(1))
    mins = int(match.group(2)) if match.group(2) else 0
    ampm = (match.group(3) or "").lower()
    task = match.group(4).strip()

    if ampm == "pm" and hours < 12:
        hours += 12
    if ampm == "am" and hours == 12:
        hours = 0
    if not (0 <= hours <= 23 and 0 <= mins <= 59):
        return None

    target = now.replace(hour=hours, minute=mins, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)

    minutes = math.ceil((target - now).total_seconds() / 60)
    return minutes, task, f"{hours:02d}:{mins:02d}"


Responder = Callable[[str, re.Match], str | None]


class QuickPattern(BaseModel):
    """One table entry: an intent, its triggers and what it answers."""

    model_config = {"arbitrary_types_allowed": True}

    intent: QuickIntent
    patterns: list[re.Pattern]
    respond: Responder

    def match(self, text: str) -> re.Match | None:
        for pattern in self.patterns:
            found = pattern.search(text)
            if found:
                return found
        return None


class QuickReply(BaseModel):
    intent: QuickIntent
    text: str


def _compile(*patterns: str) -> list[re.Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


class QuickResponder:
    def __init__(
        self,
        state: AssistantState,
        mood: MoodEngine,
        reminders: ReminderRegistry,
        *,
        rng: random.Random | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.state = state
        self.mood = mood
        self.reminders = reminders
        self.rng = rng or random.Random()
        self._now = now
        self.table = self._build_table()

    def _build_table(self) -> list[QuickPattern]:
        return [
            QuickPattern(
                intent=QuickIntent.GREETING,
                patterns=_compile(r"^(hi|hello|hey|yo|sup|hiya|howdy)[\s!.,?]*$"),
                respond=lambda chat_id, m: self.rng.choice(GREETING_RESPONSES),
            ),
            QuickPattern(
                intent=QuickIntent.THANKS,
                patterns=_compile(r"^(thanks|thank\s*you|thx|ty|cheers)[\s!.,?]*$"),
                respond=lambda chat_id, m: self.rng.choice(THANKS_RESPONSES),
            ),
            QuickPattern(
                intent=QuickIntent.TIME,
                patterns=_compile(r"what\s*(time|hour)\s*(is\s*it)?", r"^time\??$"),
                respond=self._time,
            ),
            QuickPattern(
                intent=QuickIntent.DATE,
                patterns=_compile(r"what\s*(day|date)\s*(is\s*it)?", r"^date\??$", r"today'?s?\s*date"),
                respond=self._date,
            ),
            QuickPattern(
                intent=QuickIntent.HOW_ARE_YOU,
                patterns=_compile(
                    r"how\s*(are|r)\s*(you|u)",
                    r"how'?s?\s*(it\s*going|things)",
                    r"you\s*(ok|okay|good|alright)",
                ),
                respond=lambda chat_id, m: self.rng.choice(HOW_ARE_YOU_RESPONSES[self.mood.tier()]),
            ),
            QuickPattern(
                intent=QuickIntent.REPEAT_LAST,
                patterns=_compile(
                    r"what\s*did\s*(you|u)\s*say",
                    r"repeat\s*that",
                    r"say\s*that\s*again",
                    r"^huh\??$",
                ),
                respond=self._repeat_last,
            ),
            QuickPattern(
                intent=QuickIntent.REMIND_IN,
                patterns=_compile(r"remind\s+me\s+in\s+\d+"),
                respond=self._remind_in,
            ),
            QuickPattern(
                intent=QuickIntent.REMIND_AT,
                patterns=_compile(r"remind\s+me\s+at\s+\d"),
                respond=self._remind_at,
            ),
            QuickPattern(
                intent=QuickIntent.REMIND_HELP,
                patterns=_compile(r"remind\s+me\s+"),
                respond=lambda chat_id, m: REMINDER_HELP,
            ),
        ]

    # ------------------------------------------------------------------
    # Responders
    # ------------------------------------------------------------------

    def _time(self, chat_id: str, match: re.Match) -> str:
        now = self._now()
        return f"It's {now.strftime('%I:%M %p').lstrip('0')} 🕐"

    def _date(self, chat_id: str, match: re.Match) -> str:
        now = self._now()
        return f"It's {now:%A, %B} {now.day}, {now.year} 📅"

    def _repeat_last(self, chat_id: str, match: re.Match) -> str:
        last = self.state.last_responses.get(chat_id)
        if last:
            return f'I said: "{last}"'
        return "I haven't said anything yet in this conversation!"

    def _remind_in(self, chat_id: str, match: re.Match) -> str | None:
        parsed = parse_reminder_in(match.string)
        if not parsed:
            return None
        minutes, task = parsed
        reminder = self.reminders.add(chat_id, task, minutes)
        return f"⏰ Got it! I'll remind you in {format_duration(minutes)} to: {task} [#{reminder.id}]"

    def _remind_at(self, chat_id: str, match: re.Match) -> str | None:
        parsed = parse_reminder_at(match.string, self._now())
        if not parsed:
            return None
        minutes, task, time_str = parsed
        reminder = self.reminders.add(chat_id, task, minutes)
        return f"⏰ Got it! I'll remind you at {time_str} to: {task} [#{reminder.id}]"

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match(self, chat_id: str, text: str) -> QuickReply | None:
        """Walk the table only; no overrides, no mood cost."""
        for entry in self.table:
            found = entry.match(text)
            if found is None:
                continue
            answer = entry.respond(chat_id, found)
            if answer:
                return QuickReply(intent=entry.intent, text=answer)
        return None

    def respond(self, chat_id: str, text: str) -> QuickReply | None:
        """Answer without the LLM if possible; None means "ask the LLM"."""
        if self.state.tokens.usage_ratio >= 1.0:
            reply = self.match(chat_id, text)
            return reply or QuickReply(intent=QuickIntent.BUDGET_EXHAUSTED, text=replies.BUDGET_EXHAUSTED)

        if self.mood.needs_cooldown:
            self.mood.cool_down()
            logger.info(f"Stress high, sending cooldown reply to {chat_id}")
            return QuickReply(intent=QuickIntent.COOLDOWN, text=replies.COOLDOWN)

        reply = self.match(chat_id, text)
        if reply:
            self.mood.record_quick_response()
        return reply
