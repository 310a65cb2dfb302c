# openclaw_lite/assistant.py
"""
Assistant: the entry point a chat transport talks to.

Per incoming message:

1. truncate over-long input
2. text-only messages try the quick responder first (no LLM)
3. otherwise ``chat``: budget params, model upgrade, block/offline checks,
   store the user turn, compress, run the tool loop, update mood, store
   the reply

A background tick regulates mood, resets the daily budget, sends due
reminders and runs any registered tick hooks.

``handle_message`` always returns a reply. Failures become an apology and
a bit of extra stress.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
import time
from collections.abc import Awaitable, Callable
from datetime import datetime

from openclaw_lite import replies
from openclaw_lite.budget import BudgetGovernor
from openclaw_lite.compression import CompressionPipeline
from openclaw_lite.config import AssistantConfig
from openclaw_lite.exceptions import ExternalAPIError
from openclaw_lite.llm import AnthropicClient, LLMClient
from openclaw_lite.models.attachment import Attachment
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.models.mood import AssistantState
from openclaw_lite.mood import MoodEngine
from openclaw_lite.orchestrator import ToolOrchestrator
from openclaw_lite.quick_responses import QuickResponder
from openclaw_lite.reminders import ReminderRegistry
from openclaw_lite.session_store import SessionStore
from openclaw_lite.storage.file_backend import FileSessionBackend
from openclaw_lite.tools.dispatcher import ToolDispatcher
from openclaw_lite.tools.reminder_tools import register_reminder_tools

logger = logging.getLogger(__name__)

# Sends a message to a conversation on the chat transport
Notifier = Callable[[str, str], Awaitable[None]]
TickHook = Callable[[], Awaitable[None]]

DEFAULT_SYSTEM_PROMPT = (
    "You are OpenClaw Lite 🦞, a friendly personal assistant chatting over a messaging app. "
    "Keep replies short and conversational. Use the reminder tools when the user asks to be "
    "reminded of something."
)

REMINDER_TEMPLATE = "⏰ *Reminder*: {message}"


class Assistant:
    def __init__(
        self,
        config: AssistantConfig,
        notifier: Notifier,
        *,
        llm: LLMClient | None = None,
        store: SessionStore | None = None,
        state: AssistantState | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.notifier = notifier
        self.system_prompt = system_prompt
        self._clock = clock

        self.state = state or AssistantState.create(config.daily_token_budget)
        self.store = store or SessionStore(
            FileSessionBackend(config.sessions_dir),
            max_history=config.max_history,
            cache_size=config.session_cache_size,
            debounce_seconds=config.debounce_seconds,
        )

        if llm is None and config.api_key:
            llm = AnthropicClient(
                config.api_key,
                timeout=config.request_timeout,
                max_retries=config.max_retries,
            )
        self.llm = llm

        rng = rng or random.Random()
        self.governor = BudgetGovernor.from_config(config, self.state.tokens)
        self.mood = MoodEngine(
            self.state,
            rng=rng,
            clock=clock,
            idle_curiosity_seconds=config.idle_curiosity_seconds,
        )
        self.reminders = ReminderRegistry(clock=clock)
        self.dispatcher = ToolDispatcher()
        register_reminder_tools(self.dispatcher, self.reminders)
        self.quick = QuickResponder(self.state, self.mood, self.reminders, rng=rng, now=now)

        self.compression: CompressionPipeline | None = None
        self.orchestrator: ToolOrchestrator | None = None
        if llm is not None:
            self.compression = CompressionPipeline(
                self.store,
                llm,
                self.governor,
                model=config.compression_model,
                threshold=config.compression_threshold,
                keep=config.compression_keep,
                max_tokens=config.compression_max_tokens,
            )
            self.orchestrator = ToolOrchestrator(
                self.store,
                llm,
                self.governor,
                self.dispatcher,
                max_tool_rounds=config.max_tool_rounds,
            )

        self._tick_hooks: list[TickHook] = []
        self._tick_task: asyncio.Task | None = None

    @property
    def offline(self) -> bool:
        return self.llm is None

    @property
    def running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def add_tick_hook(self, hook: TickHook) -> None:
        self._tick_hooks.append(hook)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def handle_message(
        self,
        chat_id: str,
        text: str,
        attachments: list[Attachment] | None = None,
    ) -> str:
        """Reply to one incoming message. Never raises."""
        if len(text) > self.config.max_message_length:
            logger.info(f"Truncating {len(text)} char message from {chat_id}")
            text = text[: self.config.max_message_length]

        try:
            if not attachments:
                quick = self.quick.respond(chat_id, text)
                if quick is not None:
                    logger.info(f"Quick response ({quick.intent.value}) for {chat_id}, skipped API")
                    # Recorded so the model has context for follow-ups
                    self.store.append(chat_id, MessageRole.USER, text)
                    self.store.append(chat_id, MessageRole.ASSISTANT, quick.text)
                    self.state.remember_response(chat_id, quick.text)
                    return quick.text

            reply = await self.chat(chat_id, text, attachments)
        except Exception:
            logger.exception(f"Failed to process message from {chat_id}")
            self.mood.record_processing_error()
            return replies.APOLOGY

        self.state.remember_response(chat_id, reply)
        return reply

    async def chat(
        self,
        chat_id: str,
        text: str,
        attachments: list[Attachment] | None = None,
    ) -> str:
        """Answer through the LLM, subject to budget and availability.

        Raises ``ExternalAPIError`` after recording it in the mood.
        """
        params = self.governor.upgrade_for(
            self.governor.current_params(),
            has_attachments=bool(attachments),
            uses_tools=len(self.dispatcher) > 0,
        )
        if params.should_block:
            logger.info(f"Budget exhausted, not calling the API for {chat_id}")
            return replies.BUDGET_BLOCKED
        if self.orchestrator is None or self.compression is None:
            return replies.OFFLINE

        history_text = attachments[0].history_text(text) if attachments else text
        self.store.append(chat_id, MessageRole.USER, history_text)

        await self.compression.compress_if_needed(chat_id)
        self.mood.note_activity()

        try:
            result = await self.orchestrator.converse(
                chat_id,
                text,
                params,
                system_prompt=self.system_prompt,
                attachments=attachments,
            )
        except ExternalAPIError as e:
            self.mood.record_api_error(e)
            raise

        cost = self.mood.record_exchange(result.total_tokens)
        logger.info(
            f"[{result.model}] {result.calls} call(s), {result.tool_rounds} tool round(s), "
            f"{result.total_tokens} tokens, energy -{cost}"
        )

        reply = self.mood.decorate(result.text)
        self.store.append(chat_id, MessageRole.ASSISTANT, reply)
        return reply

    async def send(self, chat_id: str, text: str) -> None:
        """Send a message on the assistant's own initiative and record it."""
        await self.notifier(chat_id, text)
        self.store.append(chat_id, MessageRole.ASSISTANT, text)

    # ------------------------------------------------------------------
    # Background tick
    # ------------------------------------------------------------------

    async def tick(self) -> None:
        now = self._clock()
        self.mood.tick(now)

        for reminder in self.reminders.pop_due(now):
            try:
                await self.send(reminder.chat_id, REMINDER_TEMPLATE.format(message=reminder.message))
                logger.info(f"Sent reminder #{reminder.id} to {reminder.chat_id}")
            except Exception as e:
                logger.error(f"Failed to send reminder #{reminder.id} to {reminder.chat_id}: {e}")

        for hook in self._tick_hooks:
            try:
                await hook()
            except Exception:
                logger.exception("Tick hook failed")

        pruned = self.state.prune_last_responses()
        if pruned:
            logger.debug(f"Pruned {pruned} stale last responses")

    async def _tick_forever(self) -> None:
        while True:
            await asyncio.sleep(self.config.tick_interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Tick failed")

    def start(self) -> None:
        """Start the background tick on the running loop."""
        if self.running:
            return
        self._tick_task = asyncio.create_task(self._tick_forever())
        if self.offline:
            logger.warning("ANTHROPIC_API_KEY is not set - running in offline mode (quick responses only)")
        logger.info(f"Assistant started, ticking every {self.config.tick_interval}s")

    async def shutdown(self) -> None:
        """Stop ticking and flush every pending session write."""
        if self._tick_task is not None:
            self._tick_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._tick_task
            self._tick_task = None
        self.store.flush_all()
        logger.info("Assistant shut down")

    async def __aenter__(self) -> Assistant:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
