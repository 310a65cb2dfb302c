#!/usr/bin/env python3
# examples/console_chat.py
"""
Console chat: talk to the assistant from a terminal.

Quick answers ("hi", "what time is it", "remind me in 1 min to stretch")
work without an API key. Set ANTHROPIC_API_KEY in the environment or a
.env file for real conversations.

Run with: python examples/console_chat.py
"""

import asyncio
import logging

from openclaw_lite import Assistant, AssistantConfig

CHAT_ID = "console"


async def print_message(chat_id: str, text: str) -> None:
    print(f"\n🦞 {text}\n> ", end="", flush=True)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = AssistantConfig.from_env()

    async with Assistant(config, print_message) as assistant:
        print("🦞 OpenClaw Lite console (Ctrl-D to quit)")
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if not line.strip():
                continue
            reply = await assistant.handle_message(CHAT_ID, line)
            print(f"🦞 {reply}")

        tokens = assistant.state.tokens
        mood = assistant.state.mood
        print(f"\nBudget used: {tokens.usage_percent}% ({tokens.used}/{tokens.budget})")
        print(f"Mood: energy={mood.energy:.0f} stress={mood.stress:.0f} curiosity={mood.curiosity:.0f}")


if __name__ == "__main__":
    asyncio.run(main())
