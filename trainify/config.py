# trainify/config.py

"""
Application settings for Trainify AI.

All values are read once from the process environment (and an optional `.env`
file) into a single `Settings` object. The object is created at startup and
handed to the collaborator constructors, so nothing else in the package reads
`os.environ` directly.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trainify.errors import ConfigurationError


class Settings(BaseSettings):
    """Runtime configuration for the web service and its AI collaborators."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Credentials ---
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")

    # --- Models ---
    text_model: str = Field(default="gpt-4o-mini", validation_alias="TRAINIFY_TEXT_MODEL")
    tts_model: str = Field(default="tts-1", validation_alias="TRAINIFY_TTS_MODEL")
    tts_voice: str = Field(default="alloy", validation_alias="TRAINIFY_TTS_VOICE")
    image_model: str = Field(default="dall-e-3", validation_alias="TRAINIFY_IMAGE_MODEL")
    image_size: str = Field(default="1024x1024", validation_alias="TRAINIFY_IMAGE_SIZE")

    # --- Network ---
    request_timeout_seconds: float = Field(default=60.0, gt=0, validation_alias="TRAINIFY_REQUEST_TIMEOUT")

    # --- Plan cache ---
    cache_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0, validation_alias="TRAINIFY_CACHE_TTL_SECONDS")
    cache_max_entries: int = Field(default=10, gt=0, validation_alias="TRAINIFY_CACHE_MAX_ENTRIES")

    # --- Logging ---
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")

    # --- Server ---
    host: str = Field(default="localhost", validation_alias="TRAINIFY_HOST")
    port: int = Field(default=8080, validation_alias="TRAINIFY_PORT")

    def require_openai_key(self) -> str:
        """
        Returns the OpenAI API key or fails fast.

        Raises:
            ConfigurationError: If `OPENAI_API_KEY` is not configured.
        """
        if not self.openai_api_key.strip():
            raise ConfigurationError("OPENAI_API_KEY is not configured. Add it to your environment or .env file.")
        return self.openai_api_key


@lru_cache
def get_settings() -> Settings:
    """Returns the process-wide settings instance."""
    return Settings()
