"""
Call outcomes and their classification.

Every completion attempt, whether it went over REST or through the SDK,
is reduced to exactly one CallOutcome. The cascade only ever looks at the
outcome type, never at raw status codes.

Classification order (first match wins):
  no status                     -> OtherError   (transport failure)
  2xx with text                 -> Success
  2xx without text              -> OtherError
  401 / 403                     -> InvalidKey   (leaked if the message says so)
  400 + "API key not valid"     -> InvalidKey
  429 / quota / exhausted       -> RateLimited
  404                           -> NotFound
  anything else                 -> OtherError
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class ModelCandidate:
    name: str
    api_version: str = "v1beta"

    def __str__(self) -> str:
        return f"{self.api_version}/{self.name}"


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class RateLimited:
    message: str = ""


@dataclass(frozen=True)
class InvalidKey:
    leaked: bool = False
    message: str = ""


@dataclass(frozen=True)
class NotFound:
    message: str = ""


@dataclass(frozen=True)
class OtherError:
    message: str = ""


CallOutcome = Union[Success, RateLimited, InvalidKey, NotFound, OtherError]

_INVALID_KEY_MARKERS = ("api_key_invalid", "api key not valid", "api key expired")
_QUOTA_MARKERS = ("quota", "resource_exhausted", "rate limit")


def is_fatal(outcome: CallOutcome) -> bool:
    """Outcomes that must stop the whole cascade, not just this candidate."""
    return isinstance(outcome, InvalidKey)


def classify(
    status: Optional[int],
    message: Optional[str] = None,
    text: Optional[str] = None,
    error_code: Optional[int] = None,
) -> CallOutcome:
    """
    Map one response onto a CallOutcome.

    Args:
        status: HTTP status, or None if the request never got a response
        message: human-readable error message from the provider (if any)
        text: extracted completion text for successful responses
        error_code: the `error.code` field of the payload, when it differs
            from the transport status (some proxies answer 200/500 with a
            429 body)
    """
    msg = (message or "").strip()
    lowered = msg.lower()

    if status is None:
        return OtherError(msg or "No response")

    if 200 <= status < 300 and error_code is None:
        if text and text.strip():
            return Success(text.strip())
        return OtherError(msg or "No response data")

    if status in (401, 403):
        return InvalidKey(leaked="leaked" in lowered, message=msg)

    if status == 400 and any(marker in lowered for marker in _INVALID_KEY_MARKERS):
        return InvalidKey(leaked="leaked" in lowered, message=msg)

    if status == 429 or error_code == 429 or any(m in lowered for m in _QUOTA_MARKERS):
        return RateLimited(msg)

    if status == 404:
        return NotFound(msg)

    return OtherError(msg or f"HTTP {status}")


def describe(outcome: CallOutcome) -> str:
    """One-line label used in attempt summaries and logs."""
    if isinstance(outcome, Success):
        return "ok"
    if isinstance(outcome, RateLimited):
        return f"rate limited ({outcome.message})" if outcome.message else "rate limited"
    if isinstance(outcome, InvalidKey):
        return "leaked API key" if outcome.leaked else "invalid API key"
    if isinstance(outcome, NotFound):
        return f"not found ({outcome.message})" if outcome.message else "not found"
    return outcome.message or "error"
