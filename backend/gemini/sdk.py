"""
google-genai SDK access (secondary mechanism).

Same request/response contract as the REST path, but through the provider's
client library. One SDK client is built per API version and reused for the
lifetime of this object.
"""

import logging
from typing import Callable, Optional

from google import genai
from google.genai import types

from gemini.outcomes import CallOutcome, ModelCandidate, classify

logger = logging.getLogger(__name__)


def _default_client_factory(api_key: str, api_version: str) -> genai.Client:
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(api_version=api_version),
    )


def _response_text(response) -> str:
    """response.text raises or returns None for blocked/empty candidates."""
    try:
        text = response.text
    except (ValueError, AttributeError):
        return ""
    return text or ""


class SdkCompletion:
    """Secondary mechanism: google.genai.Client.models.generate_content."""

    name = "sdk"

    def __init__(
        self,
        *,
        api_key: str,
        client_factory: Optional[Callable[[str, str], object]] = None,
    ) -> None:
        self._api_key = api_key
        self._factory = client_factory or _default_client_factory
        self._clients: dict[str, object] = {}

    def _client_for(self, api_version: str):
        client = self._clients.get(api_version)
        if client is None:
            client = self._factory(self._api_key, api_version)
            self._clients[api_version] = client
        return client

    def close(self) -> None:
        for client in self._clients.values():
            close = getattr(client, "close", None)
            if callable(close):
                close()
        self._clients.clear()

    def generate(self, candidate: ModelCandidate, prompt: str) -> CallOutcome:
        try:
            client = self._client_for(candidate.api_version)
            response = client.models.generate_content(
                model=candidate.name,
                contents=prompt,
            )
        except Exception as exc:
            logger.debug("SDK %s failed: %s", candidate, exc)
            # google.genai.errors.APIError carries `code` and `message`;
            # anything else (network, SDK bugs) has neither.
            code = getattr(exc, "code", None)
            message = getattr(exc, "message", None) or str(exc)
            status = getattr(exc, "status", None)
            if isinstance(status, str) and status not in message:
                message = f"{message} {status}"
            return classify(code if isinstance(code, int) else None, message)

        return classify(200, text=_response_text(response))
