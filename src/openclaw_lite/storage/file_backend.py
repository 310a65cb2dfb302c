# openclaw_lite/storage/file_backend.py
"""One JSON file per conversation under a sessions directory."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from openclaw_lite.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def safe_record_key(chat_id: str) -> str:
    """Filesystem-safe key: every non-alphanumeric character becomes ``_``."""
    return _UNSAFE_CHARS.sub("_", chat_id)


class FileSessionBackend:
    """Reads and writes raw session records.

    Every failure other than "no such record" is raised as
    :class:`PersistenceError`; deciding how to degrade is the caller's job.
    """

    def __init__(self, directory: str | os.PathLike[str]):
        self.directory = Path(directory)

    def path_for(self, chat_id: str) -> Path:
        return self.directory / f"{safe_record_key(chat_id)}.json"

    def read(self, chat_id: str) -> str | None:
        path = self.path_for(chat_id)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise PersistenceError(chat_id, f"undecodable bytes in {path}: {e}", corrupted=True) from e
        except OSError as e:
            raise PersistenceError(chat_id, f"failed to read {path}: {e}") from e

    def write(self, chat_id: str, data: str) -> None:
        path = self.path_for(chat_id)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(data, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(chat_id, f"failed to write {path}: {e}") from e

    def delete(self, chat_id: str) -> bool:
        path = self.path_for(chat_id)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceError(chat_id, f"failed to delete {path}: {e}") from e

    def backup_corrupted(self, chat_id: str, stamp_ms: int) -> Path:
        """Move an unreadable record aside as ``<name>.corrupted.<ms>``."""
        path = self.path_for(chat_id)
        backup = path.with_name(f"{path.name}.corrupted.{stamp_ms}")
        try:
            os.replace(path, backup)
        except OSError as e:
            raise PersistenceError(chat_id, f"failed to back up {path}: {e}", corrupted=True) from e
        return backup
