"""
Gemini model configuration.

Priority chain: known-good models first, in fixed order. Discovered models
that are not in the priority list are appended after them. When discovery
fails, the static fallback list is used instead.

Model names churn between provider releases, so every list here can be
overridden from the environment (comma-separated), e.g. in .env:
  GEMINI_PRIORITY_MODELS=gemini-2.5-flash,gemini-2.5-pro
  GEMINI_MODEL=gemini-2.0-flash       # pinned in front of the priority list
"""

import os
from typing import Optional

PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY"


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


_primary = os.environ.get("GEMINI_MODEL")

GEMINI_PRIORITY_MODELS = list(dict.fromkeys(
    ([_primary] if _primary else [])
    + _env_list("GEMINI_PRIORITY_MODELS", [
        "gemini-2.5-flash",
        "gemini-2.5-pro",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
    ])
))

GEMINI_FALLBACK_MODELS = list(dict.fromkeys(
    GEMINI_PRIORITY_MODELS
    + _env_list("GEMINI_FALLBACK_MODELS", [
        "gemini-pro",
        "gemini-1.0-pro",
    ])
))

# Newer API surface first
GEMINI_API_VERSIONS = _env_list("GEMINI_API_VERSIONS", ["v1beta", "v1"])

GEMINI_BASE_URL = os.environ.get(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
).rstrip("/")

GEMINI_TIMEOUT_SECONDS = float(os.environ.get("GEMINI_TIMEOUT_SECONDS", "30"))

MAX_HISTORY_TURNS = 20


def get_api_key() -> Optional[str]:
    """Return the configured key, or None when unset or still the placeholder."""
    key = (os.environ.get("GEMINI_API_KEY") or "").strip()
    if not key or key == PLACEHOLDER_API_KEY:
        return None
    return key
