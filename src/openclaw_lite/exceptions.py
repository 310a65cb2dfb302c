# openclaw_lite/exceptions.py
"""Exception hierarchy for the assistant core."""

from __future__ import annotations


class OpenClawError(Exception):
    """Base class for every error raised by this package."""


class PersistenceError(OpenClawError):
    """A session record could not be read, parsed or written."""

    def __init__(self, chat_id: str, message: str, *, corrupted: bool = False):
        super().__init__(f"{chat_id}: {message}")
        self.chat_id = chat_id
        self.corrupted = corrupted


class SummarizationError(OpenClawError):
    """The summarizer call failed or produced nothing usable."""


class ExternalAPIError(OpenClawError):
    """The LLM API call failed.

    ``status_code`` is None for transport failures (timeouts, refused
    connections). ``retry_after`` is in seconds when the API sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429


class ToolExecutionError(OpenClawError):
    """A tool handler failed. Never escapes the dispatcher."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"{tool_name}: {message}")
        self.tool_name = tool_name


class ToolInputError(ToolExecutionError):
    """Tool input failed validation against the tool's input model."""
