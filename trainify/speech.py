# trainify/speech.py

"""
Text-to-speech collaborator.

Synthesizes a day's spoken content into an MP3 clip through the OpenAI speech
API. Voice names from older clients ("Sarah", "Aria", ...) are mapped onto the
OpenAI voices so existing callers keep working.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from loguru import logger
from openai import AsyncOpenAI

from trainify.config import Settings
from trainify.errors import SpeechError
from trainify.openai_client import build_client, translate_upstream_errors


OPENAI_VOICES = ["alloy", "echo", "fable", "onyx", "nova", "shimmer"]

VOICE_MAP: Dict[str, str] = {
    **{voice: voice for voice in OPENAI_VOICES},
    # Legacy names
    "sarah": "nova",
    "aria": "shimmer",
    "roger": "onyx",
    "charlie": "echo",
}

SPEECH_FAILED_MESSAGE = "Failed to generate speech. Please try again."


def resolve_voice(voice: Optional[str], default: str = "alloy") -> str:
    """Maps a requested voice name (case-insensitive) onto an OpenAI voice."""
    if not voice:
        return default
    return VOICE_MAP.get(voice.strip().lower(), default)


@dataclass
class AudioClip:
    audio: bytes
    voice: str
    mime_type: str = "audio/mpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.audio).decode("ascii")


class SpeechSynthesizer(ABC):
    """Turns text into an `AudioClip`."""

    @abstractmethod
    async def synthesize(self, text: str, voice: Optional[str] = None) -> AudioClip:
        ...


class OpenAISpeechSynthesizer(SpeechSynthesizer):
    """
    Speech synthesis backed by the OpenAI `audio.speech` endpoint.

    Args:
        settings: Supplies the API key, TTS model and default voice.
        client: Optional pre-built `AsyncOpenAI` client, mainly for tests.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = build_client(self.settings)
        return self._client

    async def synthesize(self, text: str, voice: Optional[str] = None) -> AudioClip:
        """
        Synthesizes `text` as MP3.

        Raises:
            SpeechError: If the text is empty or the upstream call fails.
            ConfigurationError: If no API key is configured.
        """
        if not text or not text.strip():
            raise SpeechError("Text is required")

        selected = resolve_voice(voice, default=self.settings.tts_voice)
        client = self.client
        logger.info(f"Generating speech ({len(text)} chars, voice={selected})")

        with translate_upstream_errors(SpeechError, SPEECH_FAILED_MESSAGE):
            response = await client.audio.speech.create(
                model=self.settings.tts_model,
                voice=selected,
                input=text,
                response_format="mp3",
            )

        audio = response.content
        if not audio:
            raise SpeechError(SPEECH_FAILED_MESSAGE)
        logger.debug(f"Speech generated ({len(audio)} bytes)")
        return AudioClip(audio=audio, voice=selected)
