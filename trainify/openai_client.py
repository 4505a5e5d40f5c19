# trainify/openai_client.py

"""
Shared plumbing for the OpenAI-backed collaborators.

Builds clients from `Settings` (with the hard request timeout and no automatic
retries) and converts OpenAI SDK exceptions into the application's error
taxonomy at the point of the call.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Type

import openai
from loguru import logger
from openai import AsyncOpenAI

from trainify.config import Settings
from trainify.errors import (
    RateLimitError,
    TrainifyError,
    UpstreamAuthError,
    format_retry_delay,
    parse_retry_delay,
)


RETRY_INFO_TYPE = "type.googleapis.com/google.rpc.RetryInfo"
AUTH_MESSAGE = "Invalid API key or insufficient permissions. Please check your API key configuration."


def build_client(settings: Settings) -> AsyncOpenAI:
    """
    Creates an async OpenAI client.

    Raises:
        ConfigurationError: If no API key is configured.
    """
    return AsyncOpenAI(
        api_key=settings.require_openai_key(),
        timeout=settings.request_timeout_seconds,
        max_retries=0,
    )


def retry_after_seconds(error: openai.RateLimitError) -> Optional[float]:
    """Reads the retry delay from response headers or a RetryInfo body detail."""
    headers = getattr(error.response, "headers", None) or {}
    retry_ms = parse_retry_delay(headers.get("retry-after-ms"))
    if retry_ms is not None:
        return retry_ms / 1000
    retry_after = parse_retry_delay(headers.get("retry-after"))
    if retry_after is not None:
        return retry_after

    body: Any = error.body
    if isinstance(body, dict):
        details = (body.get("error") or body).get("details") or []
        for detail in details:
            if isinstance(detail, dict) and detail.get("@type") == RETRY_INFO_TYPE:
                return parse_retry_delay(detail.get("retryDelay"))
    return None


def rate_limit_error(error: openai.RateLimitError) -> RateLimitError:
    delay = retry_after_seconds(error)
    logger.warning(f"AI service rate limit hit (retry after {delay}s)")
    return RateLimitError(format_retry_delay(delay), retry_after_seconds=delay)


@contextmanager
def translate_upstream_errors(fallback: Type[TrainifyError], message: str) -> Iterator[None]:
    """
    Converts OpenAI SDK errors raised inside the block.

    Rate limits and rejected credentials keep their own types; every other
    SDK error (connection failures, timeouts, server errors) becomes
    `fallback(message)`.
    """
    try:
        yield
    except openai.RateLimitError as e:
        raise rate_limit_error(e) from e
    except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
        raise UpstreamAuthError(AUTH_MESSAGE) from e
    except openai.APIError as e:
        logger.error(f"Upstream call failed: {type(e).__name__}: {e}")
        raise fallback(message) from e
