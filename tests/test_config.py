# tests/test_config.py
"""
Tests for AssistantConfig defaults, validation and environment loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from openclaw_lite.config import FALLBACK_MODEL, AssistantConfig


class TestDefaults:
    def test_defaults(self):
        config = AssistantConfig()
        assert config.daily_token_budget == 100_000
        assert config.max_history == 50
        assert config.compression_threshold == 25
        assert config.compression_keep == 12
        assert config.compression_max_tokens == 300
        assert config.max_tool_rounds == 15
        assert config.session_cache_size == 20
        assert config.debounce_seconds == 1.0
        assert config.tick_interval == 30.0
        assert config.max_message_length == 4000
        assert config.fallback_model == FALLBACK_MODEL

    def test_keep_must_be_below_threshold(self):
        with pytest.raises(ValidationError):
            AssistantConfig(compression_threshold=10, compression_keep=10)

    def test_budget_must_be_positive(self):
        with pytest.raises(ValidationError):
            AssistantConfig(daily_token_budget=0)


class TestFromEnv:
    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        monkeypatch.setenv("OPENCLAW_MODEL", "env-model")
        monkeypatch.setenv("OPENCLAW_DAILY_TOKEN_BUDGET", "5000")
        monkeypatch.setenv("OPENCLAW_MAX_HISTORY", "30")
        monkeypatch.setenv("OPENCLAW_SESSIONS_DIR", str(tmp_path))
        monkeypatch.setenv("OPENCLAW_LIZARD_INTERVAL", "15000")

        config = AssistantConfig.from_env()

        assert config.api_key == "sk-env"
        assert config.model == "env-model"
        assert config.daily_token_budget == 5000
        assert config.max_history == 30
        assert config.sessions_dir == Path(tmp_path)
        assert config.tick_interval == 15.0

    def test_empty_values_ignored(self, monkeypatch):
        monkeypatch.setenv("OPENCLAW_MAX_HISTORY", "")
        assert AssistantConfig.from_env().max_history == 50

    def test_invalid_value_rejected(self, monkeypatch):
        monkeypatch.setenv("OPENCLAW_MAX_TOKENS", "lots")
        with pytest.raises(ValidationError):
            AssistantConfig.from_env()
