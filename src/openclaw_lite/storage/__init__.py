"""Backing storage for session records."""

from openclaw_lite.storage.debounce import DebouncedWriter
from openclaw_lite.storage.file_backend import FileSessionBackend, safe_record_key

__all__ = ["DebouncedWriter", "FileSessionBackend", "safe_record_key"]
