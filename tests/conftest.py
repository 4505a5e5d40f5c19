"""Shared fixtures for the Trainify AI test suite.

The OpenAI SDK is never reached: collaborators receive `MagicMock` clients whose
endpoints are `AsyncMock`s, and SDK exceptions are built from `httpx` objects
the same way the SDK builds them.
"""

from types import SimpleNamespace
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from trainify.config import Settings
from trainify.plan_cache import PlanCache
from trainify.plan_generator import PlanGenerator
from trainify.plan_manager import PlanManager
from trainify.schemas import UserDetails
from trainify.speech import AudioClip, SpeechSynthesizer


EXAMPLE_WORKOUT = "## Day 1: Legs\n- **Squats:** 3x10 (60s)\n- **Lunges:** 3x12 (45s)"

COMBINED_RESPONSE = """===WORKOUT===
## Day 1: Legs
- **Squats:** 3x10 (60s)
===DIET===
## Breakfast
- **Oatmeal:** 1 cup
===MOTIVATION===
"Every rep counts."
"""

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSynthesizer(SpeechSynthesizer):
    """Records every synthesis request and returns a tiny clip."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: List[str] = []
        self.error = error

    async def synthesize(self, text: str, voice: Optional[str] = None) -> AudioClip:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return AudioClip(audio=b"ID3-fake-mp3", voice=voice or "alloy")


def completion(content: Optional[str]) -> SimpleNamespace:
    """Builds an object shaped like a chat completion response."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))


def status_error(
    error_type: type,
    status_code: int,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[dict] = None,
) -> openai.APIStatusError:
    request = httpx.Request("POST", OPENAI_URL)
    response = httpx.Response(status_code, request=request, headers=headers or {})
    return error_type("upstream error", response=response, body=body)


@pytest.fixture
def settings() -> Settings:
    """Settings with a dummy key and no `.env` lookup."""
    return Settings(_env_file=None, OPENAI_API_KEY="sk-test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> PlanCache:
    return PlanCache(ttl_seconds=24 * 60 * 60, max_entries=10, clock=clock)


@pytest.fixture
def user_details() -> UserDetails:
    return UserDetails(
        name="Alex",
        age=30,
        gender="female",
        height=170,
        weight=65,
        goal="muscle-gain",
        level="beginner",
        location="gym",
        diet="vegetarian",
    )


@pytest.fixture
def chat_client() -> MagicMock:
    """OpenAI client whose chat completion returns `COMBINED_RESPONSE`."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion(COMBINED_RESPONSE))
    return client


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def image_generator() -> MagicMock:
    """Image collaborator that returns a fixed URL."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="https://img.example/squats.png")
    return generator


@pytest.fixture
def manager(
    settings: Settings, cache: PlanCache, chat_client: MagicMock, synthesizer: FakeSynthesizer, image_generator: MagicMock
) -> PlanManager:
    """PlanManager wired to mocked collaborators."""
    return PlanManager(PlanGenerator(settings, cache, client=chat_client), synthesizer, image_generator)
