# openclaw_lite/session_store.py
"""
SessionStore - bounded in-memory cache of conversation histories.

- ``load`` never raises: missing, unreadable or corrupt records all degrade
  to a fresh empty session (corrupt files are moved aside first).
- ``append`` trims to ``max_history`` and schedules a debounced write.
- The cache holds at most ``cache_size`` sessions. The least recently used
  entry is evicted, and its pending write is flushed before it is dropped.

Durability is best-effort: a turn appended inside the debounce window is
lost if the process dies before the timer fires. ``flush_all`` (called on
shutdown) closes that window for graceful exits.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Iterable

from openclaw_lite.exceptions import PersistenceError
from openclaw_lite.models.message_role import MessageRole
from openclaw_lite.models.session import CompressedView, Message, Session, now_ms
from openclaw_lite.storage.debounce import DebouncedWriter
from openclaw_lite.storage.file_backend import FileSessionBackend

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 50
DEFAULT_CACHE_SIZE = 20
DEFAULT_DEBOUNCE_SECONDS = 1.0


class SessionStore:
    """Owns every Session; all mutation goes through this API."""

    def __init__(
        self,
        backend: FileSessionBackend,
        *,
        max_history: int = DEFAULT_MAX_HISTORY,
        cache_size: int = DEFAULT_CACHE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], int] = now_ms,
    ):
        self.backend = backend
        self.max_history = max_history
        self.cache_size = cache_size
        self._clock = clock
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._writer = DebouncedWriter(debounce_seconds, self._persist)

    # ------------------------------------------------------------------
    # Cache introspection
    # ------------------------------------------------------------------

    @property
    def cached_ids(self) -> list[str]:
        """Cached conversation ids, least recently used first."""
        return list(self._sessions)

    def is_cached(self, chat_id: str) -> bool:
        return chat_id in self._sessions

    def has_pending_write(self, chat_id: str) -> bool:
        return self._writer.is_pending(chat_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self, chat_id: str) -> Session:
        """Return the session for ``chat_id``, reading it from disk if needed."""
        session = self._sessions.get(chat_id)
        if session is not None:
            self._sessions.move_to_end(chat_id)
            return session

        session = self._read(chat_id)
        self._sessions[chat_id] = session
        self._evict_overflow(keep=chat_id)
        return session

    def get_history(self, chat_id: str) -> list[dict[str, str]]:
        return [m.as_llm_message() for m in self.load(chat_id).messages]

    def get_compressed_view(self, chat_id: str) -> CompressedView:
        session = self.load(chat_id)
        return CompressedView(
            summary=session.conversation_summary or None,
            messages=[m.as_llm_message() for m in session.messages],
        )

    def _read(self, chat_id: str) -> Session:
        try:
            data = self.backend.read(chat_id)
        except PersistenceError as e:
            if e.corrupted:
                self._quarantine(chat_id, e)
            else:
                logger.error(f"Failed to load session for {chat_id}: {e}")
            return Session(last_activity=self._clock())

        if data is None:
            return Session(last_activity=self._clock())

        try:
            return Session.from_record(data)
        except ValueError as e:
            self._quarantine(chat_id, e)
            return Session(last_activity=self._clock())

    def _quarantine(self, chat_id: str, error: Exception) -> None:
        try:
            backup = self.backend.backup_corrupted(chat_id, self._clock())
            logger.error(f"Corrupted session file for {chat_id}, backed up to {backup}: {error}")
        except PersistenceError as e:
            logger.error(f"Corrupted session file for {chat_id} (backup failed: {e}): {error}")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, chat_id: str, role: MessageRole | str, content: str) -> Message:
        """Append a turn, trim to ``max_history`` and schedule a write."""
        session = self.load(chat_id)
        stamp = self._clock()
        message = Message(role=MessageRole(role), content=content, timestamp=stamp)
        session.messages.append(message)
        session.last_activity = stamp
        session.trim(self.max_history)
        self._writer.schedule(chat_id)
        return message

    def compact(self, chat_id: str, summarized: Iterable[Message], summary: str) -> int:
        """Replace ``summarized`` messages with ``summary``.

        Messages are matched by identity, so turns appended while the
        summary was being produced are kept. Returns the number removed;
        when none of them is still present (the session was cleared or
        reloaded meanwhile) nothing changes.
        """
        session = self.load(chat_id)
        dropped = {id(m) for m in summarized}
        kept = [m for m in session.messages if id(m) not in dropped]
        removed = len(session.messages) - len(kept)
        if not removed:
            return 0
        session.messages = kept
        session.conversation_summary = summary
        self._writer.schedule(chat_id)
        return removed

    def clear(self, chat_id: str) -> None:
        """Forget a conversation entirely, on disk as well."""
        self._sessions.pop(chat_id, None)
        self._writer.cancel(chat_id)
        try:
            self.backend.delete(chat_id)
        except PersistenceError as e:
            logger.error(f"Failed to clear session for {chat_id}: {e}")

    def flush(self, chat_id: str) -> bool:
        return self._writer.flush(chat_id)

    def flush_all(self) -> int:
        flushed = self._writer.flush_all()
        if flushed:
            logger.info(f"Flushed {flushed} pending session write(s)")
        return flushed

    def _persist(self, chat_id: str) -> None:
        session = self._sessions.get(chat_id)
        if session is None:
            # Cleared while the write was pending
            return
        self.backend.write(chat_id, session.to_record())

    def _evict_overflow(self, keep: str) -> None:
        while len(self._sessions) > self.cache_size:
            victim = next((cid for cid in self._sessions if cid != keep), None)
            if victim is None:
                return
            self._writer.flush(victim)
            del self._sessions[victim]
            logger.debug(f"Evicted session {victim} from cache")
