# trainify/errors.py

"""
Error taxonomy for Trainify AI.

Network-layer failures are caught where the call is made and converted into
one of these types before they reach UI state:

- `ConfigurationError`: a required credential is missing. Fatal to the flow.
- `RateLimitError`: the upstream rejected the call for quota reasons.
- `UpstreamAuthError`: the upstream rejected the credential.
- `SpeechError` / `ImageGenerationError`: transient media failures.
- `ExportError`: the PDF document could not be written.

Malformed plan responses are not errors: the plan generator substitutes the
built-in default plans instead.
"""

import math
from typing import Optional


class TrainifyError(Exception):
    """Base class for every error surfaced to the user."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(TrainifyError):
    status_code = 500


class RateLimitError(TrainifyError):
    status_code = 429

    def __init__(self, message: str, retry_after_seconds: Optional[float] = None):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class UpstreamAuthError(TrainifyError):
    status_code = 403


class SpeechError(TrainifyError):
    status_code = 502


class ImageGenerationError(TrainifyError):
    status_code = 502


class ExportError(TrainifyError):
    status_code = 500


RATE_LIMIT_PREFIX = "You've exceeded the request limit for the AI service."


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_retry_delay(seconds: Optional[float]) -> str:
    """
    Builds the human-readable rate-limit message.

    Delays above 1000 are treated as milliseconds.

    Args:
        seconds: The retry delay supplied by the upstream, if any.

    Returns:
        A sentence telling the user when to try again.
    """
    if seconds is None or seconds <= 0:
        return f"{RATE_LIMIT_PREFIX} The quota resets soon, please try again later."

    if seconds > 1000:
        seconds = seconds / 1000
    total = math.ceil(seconds)
    minutes, remaining = divmod(total, 60)

    if minutes > 0:
        wait = _plural(minutes, "minute")
        if remaining > 0:
            wait += f" and {_plural(remaining, 'second')}"
    else:
        wait = _plural(total, "second")
    return f"{RATE_LIMIT_PREFIX} Please try again in {wait}."


def parse_retry_delay(value: Optional[str]) -> Optional[float]:
    """Parses a retry hint such as `"38s"`, `"38"` or `"1.5"` into seconds."""
    if value is None:
        return None
    text = str(value).strip().rstrip("s").strip()
    try:
        return float(text)
    except ValueError:
        return None
