# tests/test_settings.py
import pytest

from core.config import DEFAULT_PAGE_INSTRUCTIONS, DEFAULT_PR_INSTRUCTIONS, Engine, Settings
from core.exceptions import ConfigError


def test_defaults_without_environment():
    s = Settings.from_env({})
    assert s.DEFAULT_ENGINE is None
    assert s.OPENAI_MODEL == "gpt-4o-mini"
    assert s.GEMINI_MODEL == "gemini-2.0-flash"
    assert s.DEFAULT_MAX_CHARS == 1400
    assert s.PR_MAX_CHARS == 2400
    assert s.SUMMARY_CACHE_SIZE == 25
    assert s.PR_INSTRUCTIONS == DEFAULT_PR_INSTRUCTIONS
    assert s.PAGE_INSTRUCTIONS == DEFAULT_PAGE_INSTRUCTIONS


def test_prefixed_variables_are_read():
    s = Settings.from_env(
        {
            "PRSUM_OPENAI_API_KEY": "  sk-test  ",
            "PRSUM_DEFAULT_ENGINE": "Gemini",
            "PRSUM_DEFAULT_MAX_CHARS": "900",
            "OPENAI_API_KEY": "ignored-without-prefix",
        }
    )
    assert s.OPENAI_API_KEY == "sk-test"
    assert s.DEFAULT_ENGINE == Engine.GEMINI
    assert s.DEFAULT_MAX_CHARS == 900


def test_blank_values_mean_not_configured():
    s = Settings.from_env({"PRSUM_GEMINI_API_KEY": "   ", "PRSUM_PR_INSTRUCTIONS": ""})
    assert s.GEMINI_API_KEY is None
    assert s.PR_INSTRUCTIONS == DEFAULT_PR_INSTRUCTIONS


def test_unknown_engine_falls_back_to_auto():
    assert Settings.from_env({"PRSUM_DEFAULT_ENGINE": "local"}).DEFAULT_ENGINE is None


def test_invalid_values_raise_config_error():
    with pytest.raises(ConfigError):
        Settings.from_env({"PRSUM_DEFAULT_MAX_CHARS": "lots"})
    with pytest.raises(ConfigError):
        Settings.from_env({"PRSUM_SUMMARY_CACHE_SIZE": "0"})
