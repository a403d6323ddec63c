"""
Gemini chat client for the SoccerX assistant.

Builds a ModelResolutionCascade (REST first, SDK second) from explicit
settings and runs it off the event loop. There is no module-level client:
every caller gets its own cascade from build_cascade(), and must close it.

Edge cases handled:
  - Missing / placeholder API key (ConfigurationError before any call)
  - Invalid or leaked key (cascade aborts on first report)
  - Rate limiting (429) and quota exhaustion on some or all models
  - Model not found (renamed / retired model names)
  - Discovery endpoint failure (static fallback list)
  - Concurrent requests (each request owns its cascade; sync calls run
    via asyncio.to_thread)
"""

import asyncio
import logging
from typing import Optional, Sequence

from gemini import config
from gemini.cascade import ModelResolutionCascade
from gemini.errors import ChatError, missing_key_error
from gemini.rest import RestCompletion
from gemini.sdk import SdkCompletion
from models.chat import ChatMessage

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return config.get_api_key() is not None


def build_cascade(api_key: Optional[str] = None) -> ModelResolutionCascade:
    """
    Construct a cascade for `api_key` (defaults to GEMINI_API_KEY).

    Raises ConfigurationError if no usable key is available.
    """
    key = api_key or config.get_api_key()
    if not key:
        raise missing_key_error()

    return ModelResolutionCascade(
        primary=RestCompletion(api_key=key),
        secondary=SdkCompletion(api_key=key),
    )


async def call_gemini(
    cascade: ModelResolutionCascade,
    message: str,
    conversation_history: Sequence[ChatMessage] = (),
) -> str:
    """
    Resolve one chat turn.

    Returns the assistant text. Raises a ChatError subclass on terminal
    failure; callers turn it into a displayable message.
    """
    logger.info("Starting chat request (%d prior messages)", len(conversation_history))
    try:
        return await asyncio.to_thread(
            cascade.resolve, message, list(conversation_history)
        )
    except ChatError as exc:
        logger.warning("Chat request failed [%s]: %s", exc.kind, exc)
        raise
