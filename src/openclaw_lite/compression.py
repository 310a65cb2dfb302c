# openclaw_lite/compression.py
"""
Compression pipeline: folds old turns into a running summary.

Once a session holds more than ``threshold`` messages, everything except
the newest ``keep`` is summarized by the cheap model (together with the
previous summary, if any) and replaced by the new summary.

The pipeline is fail-open. When the summarizer errors out or returns
nothing, the session is left exactly as it was and the next turn simply
tries again.
"""

from __future__ import annotations

import logging

from openclaw_lite.budget import BudgetGovernor
from openclaw_lite.exceptions import ExternalAPIError, SummarizationError
from openclaw_lite.llm import LLMClient
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.models.session import Message
from openclaw_lite.session_store import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 25
DEFAULT_KEEP = 12
DEFAULT_MAX_TOKENS = 300

SUMMARY_INSTRUCTION = (
    "Summarize this conversation in 2-3 sentences. Focus on key topics, "
    "decisions, and context needed for continuity. Be concise."
)


def build_transcript(messages: list[Message], previous_summary: str | None = None) -> str:
    """``role: content`` lines, prefixed with the previous summary if there is one."""
    transcript = "\n\n".join(f"{m.role.value}: {m.content}" for m in messages)
    if previous_summary:
        return f"Previous context: {previous_summary}\n\nConversation:\n{transcript}"
    return transcript


class CompressionPipeline:
    def __init__(
        self,
        store: SessionStore,
        llm: LLMClient,
        governor: BudgetGovernor,
        *,
        model: str,
        threshold: int = DEFAULT_THRESHOLD,
        keep: int = DEFAULT_KEEP,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        if keep >= threshold:
            raise ValueError(f"keep ({keep}) must be smaller than threshold ({threshold})")
        self.store = store
        self.llm = llm
        self.governor = governor
        self.model = model
        self.threshold = threshold
        self.keep = keep
        self.max_tokens = max_tokens

    async def compress_if_needed(self, chat_id: str) -> bool:
        """Compress ``chat_id`` if it is over the threshold.

        Returns True when the session was compacted. Never raises.
        """
        session = self.store.load(chat_id)
        if len(session.messages) <= self.threshold:
            return False

        # Snapshot before awaiting; turns appended meanwhile are not touched
        to_summarize = list(session.messages[: -self.keep] if self.keep else session.messages)
        previous = session.conversation_summary

        logger.info(f"Compressing {len(to_summarize)} messages for {chat_id}")
        try:
            summary = await self._summarize(to_summarize, previous)
        except SummarizationError as e:
            logger.warning(f"Compression failed for {chat_id}, keeping full history: {e}")
            return False
        except Exception:
            logger.exception(f"Unexpected compression failure for {chat_id}")
            return False

        removed = self.store.compact(chat_id, to_summarize, summary)
        if not removed:
            logger.info(f"Session {chat_id} changed while summarizing, summary discarded")
            return False
        logger.info(f"Compressed {removed} messages for {chat_id} into a {len(summary)} char summary")
        return True

    async def _summarize(self, messages: list[Message], previous_summary: str | None) -> str:
        transcript = build_transcript(messages, previous_summary)
        try:
            response = await self.llm.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SUMMARY_INSTRUCTION,
                messages=[{"role": MessageRole.USER.value, "content": transcript}],
            )
        except ExternalAPIError as e:
            raise SummarizationError(str(e)) from e

        # Billed even when the digest is unusable
        self.governor.record_usage(response.total_tokens, label="compression")

        summary = (response.text or "").strip()
        if not summary:
            raise SummarizationError("summarizer returned an empty digest")
        return summary
