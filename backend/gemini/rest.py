"""
Direct REST access to the Gemini API (primary mechanism).

The key goes in the `x-goog-api-key` header so it never shows up in URLs
or log lines.
"""

import logging
from typing import Any, Optional

import httpx

from gemini.config import GEMINI_BASE_URL, GEMINI_TIMEOUT_SECONDS
from gemini.outcomes import CallOutcome, ModelCandidate, classify

logger = logging.getLogger(__name__)

GENERATE_METHOD = "generateContent"


def _normalize_model_name(name: str) -> str:
    name = (name or "").strip()
    return name.split("/", 1)[1] if name.startswith("models/") else name


def _extract_text(payload: Any) -> str:
    """Pull candidates[0].content.parts[0].text, tolerating missing levels."""
    if not isinstance(payload, dict):
        return ""
    cands = payload.get("candidates")
    if not isinstance(cands, list) or not cands or not isinstance(cands[0], dict):
        return ""
    content = cands[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    for part in parts:
        if isinstance(part, dict) and part.get("text"):
            return str(part["text"])
    return ""


def _error_fields(payload: Any) -> tuple[Optional[str], Optional[int]]:
    """Return (message, code) from a Google error envelope."""
    if not isinstance(payload, dict):
        return None, None
    err = payload.get("error")
    if not isinstance(err, dict):
        return None, None
    message = err.get("message")
    status = err.get("status")
    # Reason codes such as API_KEY_INVALID live in error.details[].reason
    reasons = [
        str(d.get("reason"))
        for d in err.get("details") or []
        if isinstance(d, dict) and d.get("reason")
    ]
    parts = [str(p) for p in (message, status, *reasons) if p]
    code = err.get("code")
    return (" ".join(parts) or None), (code if isinstance(code, int) else None)


class RestCompletion:
    """Primary mechanism: plain HTTP against the generativelanguage API."""

    name = "rest"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = GEMINI_BASE_URL,
        timeout_seconds: float = GEMINI_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"x-goog-api-key": api_key, "Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def discover_models(self, api_version: str = "v1beta") -> list[str]:
        """
        List model ids that support generateContent, in provider order.

        Any failure (transport, HTTP error, odd payload) yields an empty list;
        the cascade then falls back to its static model list.
        """
        url = f"{self.base_url}/{api_version}/models"
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Model discovery failed: %s", exc)
            return []

        rows = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            return []

        names: list[str] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            methods = row.get("supportedGenerationMethods") or []
            if GENERATE_METHOD not in methods:
                continue
            name = _normalize_model_name(str(row.get("name") or ""))
            if name:
                names.append(name)

        logger.debug("Discovered %d generateContent models: %s", len(names), names)
        return names

    def generate(self, candidate: ModelCandidate, prompt: str) -> CallOutcome:
        url = (
            f"{self.base_url}/{candidate.api_version}/models/"
            f"{candidate.name}:{GENERATE_METHOD}"
        )
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            resp = self._client.post(url, json=body)
        except httpx.HTTPError as exc:
            return classify(None, str(exc) or type(exc).__name__)

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        message, error_code = _error_fields(payload)
        if resp.status_code >= 400 and not message:
            message = resp.text[:200] or None

        return classify(
            resp.status_code,
            message,
            text=_extract_text(payload),
            error_code=error_code,
        )
