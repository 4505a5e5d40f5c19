# trainify/dependencies.py

"""
Process-wide collaborators for the API routes and the Gradio sessions.

The collaborators and the PlanManager are created once per process from the
application settings and handed to route handlers through FastAPI's dependency
injection. Tests swap them out with `app.dependency_overrides`.
"""

from functools import lru_cache

from trainify.config import get_settings
from trainify.image_generator import ImageGenerator
from trainify.plan_cache import PlanCache
from trainify.plan_generator import PlanGenerator
from trainify.plan_manager import PlanManager
from trainify.speech import OpenAISpeechSynthesizer, SpeechSynthesizer


@lru_cache
def get_plan_generator() -> PlanGenerator:
    settings = get_settings()
    cache = PlanCache(ttl_seconds=settings.cache_ttl_seconds, max_entries=settings.cache_max_entries)
    return PlanGenerator(settings, cache)


@lru_cache
def get_speech_synthesizer() -> SpeechSynthesizer:
    return OpenAISpeechSynthesizer(get_settings())


@lru_cache
def get_image_generator() -> ImageGenerator:
    return ImageGenerator(get_settings())


@lru_cache
def get_plan_manager() -> PlanManager:
    """
    FastAPI dependency to get the shared PlanManager instance.

    Returns:
        The singleton PlanManager, wired to the shared collaborators.
    """
    return PlanManager(get_plan_generator(), get_speech_synthesizer(), get_image_generator())
