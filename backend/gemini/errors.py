"""
Terminal chat errors surfaced to callers.

Each subclass carries a short `kind` the HTTP layer returns verbatim, and a
message that is safe to show to end users.
"""

from typing import Sequence


class ChatError(RuntimeError):
    kind = "error"


class ConfigurationError(ChatError):
    """The API key is missing, invalid or leaked. Not retryable."""

    kind = "configuration"


class QuotaExceededError(ChatError):
    kind = "quota_exceeded"

    def __init__(self, message: str = (
        "The AI assistant has exceeded its quota on every available model. "
        "Please try again later."
    )):
        super().__init__(message)


class UnavailableError(ChatError):
    kind = "unavailable"

    def __init__(self, attempts: Sequence[str] = ()):
        self.attempts = list(attempts)
        message = "Unable to get a response from the AI assistant."
        if self.attempts:
            message += " Tried: " + "; ".join(self.attempts)
        super().__init__(message)


def missing_key_error() -> ConfigurationError:
    return ConfigurationError(
        "Gemini API key is not configured. Set GEMINI_API_KEY in backend/.env "
        "and restart the server."
    )


def invalid_key_error(leaked: bool) -> ConfigurationError:
    if leaked:
        return ConfigurationError(
            "Gemini rejected the API key because it was reported as leaked. "
            "Rotate the key in Google AI Studio and update GEMINI_API_KEY."
        )
    return ConfigurationError(
        "Gemini rejected the API key as invalid or expired. "
        "Rotate the key in Google AI Studio and update GEMINI_API_KEY."
    )
