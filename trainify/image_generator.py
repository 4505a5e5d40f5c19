# trainify/image_generator.py

"""
Image-generation collaborator.

Illustrates a single exercise or meal. The caller passes the short subject
extracted from an item name (see `text_format.image_subject`) and receives a
hosted image URL. Each request is a single attempt; failures are reported to
the user rather than retried.
"""

from typing import Dict, Optional

from loguru import logger
from openai import AsyncOpenAI

from trainify.config import Settings
from trainify.errors import ImageGenerationError
from trainify.openai_client import build_client, translate_upstream_errors


PROMPT_TEMPLATES: Dict[str, str] = {
    "exercise": (
        "A clean, realistic fitness illustration of a person performing {subject} "
        "with correct form, in a bright gym setting, no text or labels."
    ),
    "meal": (
        "A healthy, appetizing, top-down food photograph of {subject}, "
        "served on a plate with natural light, no text or labels."
    ),
}

IMAGE_FAILED_MESSAGE = "Failed to generate image. Please try again."


def build_image_prompt(subject: str, image_type: str = "exercise") -> str:
    template = PROMPT_TEMPLATES.get(image_type, PROMPT_TEMPLATES["exercise"])
    return template.format(subject=subject.strip())


class ImageGenerator:
    """
    Image generation backed by the OpenAI images API.

    Args:
        settings: Supplies the API key, image model and image size.
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

    async def generate(self, prompt: str, image_type: str = "exercise") -> str:
        """
        Generates one illustration and returns its URL.

        Args:
            prompt: The subject, e.g. "squats" or "oatmeal with berries".
            image_type: "exercise" or "meal"; selects the prompt template.

        Raises:
            ImageGenerationError: If the prompt is empty, the upstream call
                fails, or no URL comes back.
            ConfigurationError: If no API key is configured.
        """
        if not prompt or not prompt.strip():
            raise ImageGenerationError("Prompt is required")

        client = self.client
        logger.info(f"Generating {image_type} image for '{prompt}'")

        with translate_upstream_errors(ImageGenerationError, IMAGE_FAILED_MESSAGE):
            response = await client.images.generate(
                model=self.settings.image_model,
                prompt=build_image_prompt(prompt, image_type),
                size=self.settings.image_size,
                n=1,
            )

        url = response.data[0].url if response.data else None
        if not url:
            raise ImageGenerationError(IMAGE_FAILED_MESSAGE)
        return url
