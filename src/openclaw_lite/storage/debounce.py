# openclaw_lite/storage/debounce.py
"""
Keyed debounce for write-back.

At most one write is pending per key. Scheduling a key that is already
pending does nothing; when the timer fires the callback reads whatever the
latest state is, so every mutation inside the window lands in one write.

Without a running event loop (or with a zero delay) the write happens
immediately.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from openclaw_lite.exceptions import PersistenceError

logger = logging.getLogger(__name__)

WriteFn = Callable[[str], None]


class DebouncedWriter:
    def __init__(self, delay: float, write: WriteFn):
        self.delay = delay
        self._write = write
        self._pending: dict[str, asyncio.TimerHandle] = {}

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    def schedule(self, key: str) -> bool:
        """Arrange a write for ``key``; False if one was already pending."""
        if key in self._pending:
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None or self.delay <= 0:
            self._run(key)
            return True

        self._pending[key] = loop.call_later(self.delay, self._fire, key)
        return True

    def cancel(self, key: str) -> bool:
        handle = self._pending.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def flush(self, key: str) -> bool:
        """Run the pending write for ``key`` now. False if none was pending."""
        if not self.cancel(key):
            return False
        self._run(key)
        return True

    def flush_all(self) -> int:
        flushed = 0
        for key in list(self._pending):
            if self.flush(key):
                flushed += 1
        return flushed

    def _fire(self, key: str) -> None:
        self._pending.pop(key, None)
        self._run(key)

    def _run(self, key: str) -> None:
        try:
            self._write(key)
        except PersistenceError as e:
            logger.error(f"Deferred write failed for {key}: {e}")
