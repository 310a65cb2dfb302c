# openclaw_lite/config.py
"""Runtime configuration, loaded from the environment (and ``.env``)."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

_HOME = Path(os.getenv("HOME", "."))

DEFAULT_MODEL = os.getenv("OPENCLAW_MODEL", "claude-haiku-4-5-20251001")
DEFAULT_SMART_MODEL = os.getenv("OPENCLAW_SMART_MODEL", "claude-sonnet-4-20250514")
# Used by the 90-100% budget tier
FALLBACK_MODEL = "claude-3-haiku-20240307"
# Compression always runs on the cheap model
COMPRESSION_MODEL = "claude-haiku-4-5-20251001"


class AssistantConfig(BaseModel):
    """All numeric knobs and paths, each with a default."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    smart_model: str = DEFAULT_SMART_MODEL
    fallback_model: str = FALLBACK_MODEL
    compression_model: str = COMPRESSION_MODEL

    max_tokens: int = Field(default=4096, gt=0)
    max_history: int = Field(default=50, gt=0, description="Messages kept per session")
    daily_token_budget: int = Field(default=100_000, gt=0)
    tick_interval: float = Field(default=30.0, gt=0, description="Background tick, seconds")

    compression_threshold: int = Field(default=25, gt=0)
    compression_keep: int = Field(default=12, gt=0)
    compression_max_tokens: int = Field(default=300, gt=0)

    max_tool_rounds: int = Field(default=15, ge=0)
    session_cache_size: int = Field(default=20, gt=0)
    debounce_seconds: float = Field(default=1.0, ge=0)

    request_timeout: float = Field(default=60.0, gt=0)
    max_retries: int = Field(default=2, ge=0)
    max_message_length: int = Field(default=4000, gt=0)
    idle_curiosity_seconds: float = Field(default=300.0, ge=0)

    sessions_dir: Path = _HOME / ".openclaw-lite" / "sessions"

    @model_validator(mode="after")
    def _check_compression_window(self) -> AssistantConfig:
        if self.compression_keep >= self.compression_threshold:
            raise ValueError("compression_keep must be smaller than compression_threshold")
        return self

    @classmethod
    def from_env(cls) -> AssistantConfig:
        """Build a config from ``OPENCLAW_*`` environment variables."""
        overrides: dict[str, object] = {}
        env_map = {
            "api_key": "ANTHROPIC_API_KEY",
            "model": "OPENCLAW_MODEL",
            "smart_model": "OPENCLAW_SMART_MODEL",
            "max_tokens": "OPENCLAW_MAX_TOKENS",
            "max_history": "OPENCLAW_MAX_HISTORY",
            "daily_token_budget": "OPENCLAW_DAILY_TOKEN_BUDGET",
            "compression_threshold": "OPENCLAW_COMPRESS_THRESHOLD",
            "compression_keep": "OPENCLAW_COMPRESS_KEEP",
            "max_tool_rounds": "OPENCLAW_MAX_TOOL_ROUNDS",
            "session_cache_size": "OPENCLAW_SESSION_CACHE_SIZE",
            "debounce_seconds": "OPENCLAW_DEBOUNCE_SECONDS",
            "request_timeout": "OPENCLAW_REQUEST_TIMEOUT",
            "max_retries": "OPENCLAW_MAX_RETRIES",
            "sessions_dir": "OPENCLAW_SESSIONS_DIR",
        }
        for field_name, var in env_map.items():
            value = os.getenv(var)
            if value:
                overrides[field_name] = value

        # Lizard interval has always been configured in milliseconds
        interval_ms = os.getenv("OPENCLAW_LIZARD_INTERVAL")
        if interval_ms:
            overrides["tick_interval"] = int(interval_ms) / 1000

        return cls.model_validate(overrides)
