# openclaw_lite/replies.py
"""Canned user-visible replies for degraded modes."""

# Quick-response override when usage >= 100% and nothing in the table matched
BUDGET_EXHAUSTED = (
    "🔋 I've run out of thinking power for today. My brain resets at midnight! "
    "Simple questions I can still handle."
)

# Returned instead of calling the LLM when the governor blocks
BUDGET_BLOCKED = (
    "🔋 I've used up my thinking budget for today. Simple greetings and quick questions "
    "I can still handle, but for complex stuff, let's chat tomorrow! (Budget resets at midnight)"
)

COOLDOWN = "🧘 Taking a breath... I've been working hard. Give me a moment and try again."

OFFLINE = (
    "🦎 I'm running in offline mode (no API key). I can handle quick stuff like greetings, "
    "time, reminders - but for real conversations, set ANTHROPIC_API_KEY!"
)

APOLOGY = "🦞 Sorry, I encountered an error. Please try again."

TOOL_ROUNDS_EXHAUSTED = "🦞 I got tangled up in too many steps there. Could you ask me again, maybe more simply?"

EMPTY_REPLY = "🦞 Hmm, I don't have anything to add to that."
