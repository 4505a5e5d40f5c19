"""Tests for error messages and settings.

Tests cover:
- Human-readable retry delays, including millisecond values
- Parsing of retry hints
- Settings defaults and the required API key
"""

import pytest

from trainify.config import Settings
from trainify.errors import (
    RATE_LIMIT_PREFIX,
    ConfigurationError,
    ImageGenerationError,
    RateLimitError,
    SpeechError,
    UpstreamAuthError,
    format_retry_delay,
    parse_retry_delay,
)


@pytest.mark.parametrize(
    "seconds, wait",
    [
        (1, "1 second"),
        (38, "38 seconds"),
        (37.2, "38 seconds"),
        (60, "1 minute"),
        (65, "1 minute and 5 seconds"),
        (125, "2 minutes and 5 seconds"),
        (65000, "1 minute and 5 seconds"),
    ],
)
def test_format_retry_delay(seconds, wait):
    assert format_retry_delay(seconds) == f"{RATE_LIMIT_PREFIX} Please try again in {wait}."


@pytest.mark.parametrize("seconds", [None, 0])
def test_format_without_delay(seconds):
    message = format_retry_delay(seconds)
    assert message.startswith(RATE_LIMIT_PREFIX)
    assert "try again later" in message


@pytest.mark.parametrize("value, expected", [("38s", 38.0), ("38", 38.0), (" 1.5 ", 1.5), ("soon", None), (None, None)])
def test_parse_retry_delay(value, expected):
    assert parse_retry_delay(value) == expected


def test_status_codes():
    assert RateLimitError("x").status_code == 429
    assert UpstreamAuthError("x").status_code == 403
    assert SpeechError("x").status_code == 502
    assert ImageGenerationError("x").status_code == 502
    assert ConfigurationError("x").status_code == 500


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ["OPENAI_API_KEY", "TRAINIFY_TEXT_MODEL", "TRAINIFY_TTS_VOICE", "TRAINIFY_CACHE_TTL_SECONDS"]:
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.text_model == "gpt-4o-mini"
    assert settings.tts_voice == "alloy"
    assert settings.cache_ttl_seconds == 24 * 60 * 60
    assert settings.cache_max_entries == 10


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("TRAINIFY_CACHE_MAX_ENTRIES", "3")

    settings = Settings(_env_file=None)

    assert settings.require_openai_key() == "sk-env"
    assert settings.cache_max_entries == 3


def test_missing_key_fails_fast():
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        Settings(_env_file=None, OPENAI_API_KEY="  ").require_openai_key()
