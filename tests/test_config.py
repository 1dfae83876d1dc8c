"""Unit tests for configuration loading."""
from pathlib import Path

import pytest

from rebound.config import DEFAULT_CONTEXT_WINDOW, ReboundConfig
from rebound.errors import ConfigurationError


class TestReboundConfig:
    """Tests for ReboundConfig.from_env."""

    def test_defaults(self):
        config = ReboundConfig.from_env({})

        assert config.api_key is None
        assert config.model == "gemini-2.5-flash"
        assert config.context_window == DEFAULT_CONTEXT_WINDOW == 12
        assert config.generation.temperature == 0.7
        assert config.history_backend == "sqlite"

    def test_reads_environment(self):
        config = ReboundConfig.from_env({
            "GEMINI_API_KEY": "secret",
            "GEMINI_MODEL": "gemini-2.5-pro",
            "GEMINI_BASE_URL": "http://localhost:8080",
            "REBOUND_CONTEXT_WINDOW": "6",
            "REBOUND_TEMPERATURE": "0.3",
            "REBOUND_TOP_P": "0.5",
            "REBOUND_MAX_OUTPUT_TOKENS": "200",
            "REBOUND_HISTORY_BACKEND": "sqlite",
            "REBOUND_HISTORY_PATH": "/tmp/history.db",
            "REBOUND_STRICT_LOG": "true",
        })

        assert config.api_key == "secret"
        assert config.model == "gemini-2.5-pro"
        assert config.base_url == "http://localhost:8080"
        assert config.context_window == 6
        assert config.generation.temperature == 0.3
        assert config.generation.top_p == 0.5
        assert config.generation.max_output_tokens == 200
        assert config.history_backend == "sqlite"
        assert config.history_path == Path("/tmp/history.db")
        assert config.strict_log is True

    def test_empty_values_keep_defaults(self):
        config = ReboundConfig.from_env({"GEMINI_API_KEY": "", "GEMINI_BASE_URL": ""})

        assert config.api_key is None
        assert config.base_url is None

    def test_api_key_not_in_repr(self):
        config = ReboundConfig.from_env({"GEMINI_API_KEY": "secret"})
        assert "secret" not in repr(config)

    @pytest.mark.parametrize("env", [
        {"REBOUND_CONTEXT_WINDOW": "zero"},
        {"REBOUND_CONTEXT_WINDOW": "0"},
        {"REBOUND_TEMPERATURE": "3.5"},
        {"REBOUND_MAX_OUTPUT_TOKENS": "-1"},
    ])
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ReboundConfig.from_env(env)
