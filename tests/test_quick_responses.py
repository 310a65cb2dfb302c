# tests/test_quick_responses.py
"""
Tests for the quick responder.

Covers:
- Table matching for every intent, first match wins
- Mood-aware "how are you"
- Repeat-last
- Reminder parsing (relative and clock time, roll-over, invalid input)
- Budget-exhausted and cooldown overrides
- Energy cost of quick answers
"""

from datetime import datetime

import pytest

from openclaw_lite import replies
from openclaw_lite.quick_responses import (
    GREETING_RESPONSES,
    HOW_ARE_YOU_RESPONSES,
    REMINDER_HELP,
    QuickIntent,
    QuickResponder,
    parse_reminder_at,
    parse_reminder_in,
)
from openclaw_lite.mood import MoodTier

# Friday afternoon
NOW = datetime(2024, 3, 15, 15, 4)


@pytest.fixture
def responder(state, mood, reminders, rng):
    return QuickResponder(state, mood, reminders, rng=rng, now=lambda: NOW)


class TestIntents:
    @pytest.mark.parametrize("text", ["hi", "Hello!", "hey", "yo", "HOWDY", "hiya ?"])
    def test_greetings(self, responder, text):
        reply = responder.match("chat", text)
        assert reply.intent == QuickIntent.GREETING
        assert reply.text in GREETING_RESPONSES

    def test_greeting_must_be_whole_message(self, responder):
        assert responder.match("chat", "hi, can you explain recursion") is None

    @pytest.mark.parametrize("text", ["thanks", "Thank you!", "thx", "ty", "cheers"])
    def test_thanks(self, responder, text):
        assert responder.match("chat", text).intent == QuickIntent.THANKS

    @pytest.mark.parametrize("text", ["what time is it?", "time", "What hour is it"])
    def test_time(self, responder, text):
        reply = responder.match("chat", text)
        assert reply.intent == QuickIntent.TIME
        assert "3:04 PM" in reply.text

    @pytest.mark.parametrize("text", ["what day is it", "date?", "today's date please"])
    def test_date(self, responder, text):
        reply = responder.match("chat", text)
        assert reply.intent == QuickIntent.DATE
        assert "Friday, March 15, 2024" in reply.text

    def test_unmatched(self, responder):
        assert responder.match("chat", "write me a haiku about lobsters") is None


class TestHowAreYou:
    @pytest.mark.parametrize(
        ("energy", "stress", "curiosity", "tier"),
        [
            (10, 0, 50, MoodTier.LOW_ENERGY),
            (100, 60, 50, MoodTier.HIGH_STRESS),
            (100, 0, 90, MoodTier.HIGH_CURIOSITY),
            (100, 0, 50, MoodTier.NORMAL),
        ],
    )
    def test_mood_aware(self, responder, state, energy, stress, curiosity, tier):
        state.mood.energy = energy
        state.mood.stress = stress
        state.mood.curiosity = curiosity
        reply = responder.match("chat", "how are you?")
        assert reply.intent == QuickIntent.HOW_ARE_YOU
        assert reply.text in HOW_ARE_YOU_RESPONSES[tier]

    @pytest.mark.parametrize("text", ["how r u", "how's it going", "you ok?"])
    def test_variants(self, responder, text):
        assert responder.match("chat", text).intent == QuickIntent.HOW_ARE_YOU


class TestRepeatLast:
    def test_nothing_said_yet(self, responder):
        reply = responder.match("chat", "what did you say?")
        assert reply.intent == QuickIntent.REPEAT_LAST
        assert reply.text == "I haven't said anything yet in this conversation!"

    def test_repeats_per_chat(self, responder, state):
        state.remember_response("chat", "Lobsters molt.")
        state.remember_response("other", "Something else")
        assert responder.match("chat", "huh?").text == 'I said: "Lobsters molt."'


class TestReminderParsing:
    def test_parse_minutes(self):
        assert parse_reminder_in("remind me in 30 min to call mom") == (30, "call mom")

    def test_parse_hours(self):
        assert parse_reminder_in("Remind me in 2 hours stretch") == (120, "stretch")

    def test_parse_in_without_unit(self):
        assert parse_reminder_in("remind me in 5 call mom") is None

    def test_parse_clock_time_tomorrow(self):
        minutes, task, time_str = parse_reminder_at("remind me at 3pm to check oven", NOW)
        assert task == "check oven"
        assert time_str == "15:00"
        assert minutes == 24 * 60 - 4

    def test_parse_clock_time_today(self):
        assert parse_reminder_at("remind me at 4:30pm to leave", NOW) == (86, "leave", "16:30")

    def test_parse_midnight_am(self):
        minutes, _, time_str = parse_reminder_at("remind me at 12am to sleep", NOW)
        assert time_str == "00:00"
        assert minutes == (24 * 60) - (15 * 60 + 4)

    def test_parse_invalid_hour(self):
        assert parse_reminder_at("remind me at 25 to party", NOW) is None


class TestReminderIntents:
    def test_remind_in_sets_reminder(self, responder, reminders):
        reply = responder.match("chat", "remind me in 30 min to call mom")
        assert reply.intent == QuickIntent.REMIND_IN
        assert "30 minutes" in reply.text
        assert "call mom" in reply.text
        [reminder] = reminders.list_for("chat")
        assert reminder.message == "call mom"

    def test_remind_at_sets_reminder(self, responder, reminders):
        reply = responder.match("chat", "remind me at 4:30pm to leave")
        assert reply.intent == QuickIntent.REMIND_AT
        assert "16:30" in reply.text
        assert len(reminders) == 1

    def test_unparseable_falls_through_to_help(self, responder, reminders):
        reply = responder.match("chat", "remind me at 99 to dance")
        assert reply.intent == QuickIntent.REMIND_HELP
        assert reply.text == REMINDER_HELP
        assert len(reminders) == 0

    def test_help(self, responder):
        assert responder.match("chat", "remind me about stuff").intent == QuickIntent.REMIND_HELP


class TestRespond:
    def test_match_costs_energy(self, responder, state):
        reply = responder.respond("chat", "hi")
        assert reply.intent == QuickIntent.GREETING
        assert state.mood.energy == 99

    def test_no_match_is_free(self, responder, state):
        assert responder.respond("chat", "tell me a story") is None
        assert state.mood.energy == 100

    @pytest.mark.parametrize(("energy", "stress", "curiosity"), [(5, 0, 50), (100, 79, 50), (100, 0, 100)])
    def test_hi_is_always_a_greeting(self, responder, state, energy, stress, curiosity):
        state.mood.energy = energy
        state.mood.stress = stress
        state.mood.curiosity = curiosity
        assert responder.respond("chat", "hi").intent == QuickIntent.GREETING

    def test_exhausted_budget_still_answers_table(self, responder, state):
        state.tokens.used = state.tokens.budget
        assert responder.respond("chat", "hi").intent == QuickIntent.GREETING

    def test_exhausted_budget_message(self, responder, state):
        state.tokens.used = state.tokens.budget + 10
        reply = responder.respond("chat", "explain black holes")
        assert reply.intent == QuickIntent.BUDGET_EXHAUSTED
        assert reply.text == replies.BUDGET_EXHAUSTED

    def test_cooldown_when_stressed(self, responder, state):
        state.mood.stress = 85
        reply = responder.respond("chat", "hi")
        assert reply.intent == QuickIntent.COOLDOWN
        assert reply.text == replies.COOLDOWN
        assert state.mood.stress == 75
        assert state.mood.energy == 100
