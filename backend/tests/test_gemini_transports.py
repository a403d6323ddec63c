"""
Tests for the REST and SDK completion mechanisms.

REST calls go through httpx.MockTransport; the SDK client is replaced via
the client_factory hook. No network, no API key.
"""

import json
from unittest.mock import MagicMock

import httpx

from gemini.outcomes import InvalidKey, ModelCandidate, NotFound, OtherError, RateLimited, Success
from gemini.rest import RestCompletion
from gemini.sdk import SdkCompletion

API_KEY = "test-key-123"


def _rest(handler) -> RestCompletion:
    return RestCompletion(
        api_key=API_KEY,
        base_url="https://gemini.test",
        transport=httpx.MockTransport(handler),
    )


def _error(status: int, message: str, code_status: str = "", reason: str = "") -> httpx.Response:
    err = {"code": status, "message": message}
    if code_status:
        err["status"] = code_status
    if reason:
        err["details"] = [{"@type": "type.googleapis.com/google.rpc.ErrorInfo", "reason": reason}]
    return httpx.Response(status, json={"error": err})


def _success(text: str) -> httpx.Response:
    return httpx.Response(200, json={
        "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}],
    })


class TestRestDiscovery:
    def test_filters_to_generate_content_and_strips_prefix(self):
        def handler(request):
            assert request.url.path == "/v1beta/models"
            return httpx.Response(200, json={"models": [
                {"name": "models/gemini-2.5-flash", "supportedGenerationMethods": ["generateContent", "countTokens"]},
                {"name": "models/text-embedding-004", "supportedGenerationMethods": ["embedContent"]},
                {"name": "models/gemini-2.0-flash", "supportedGenerationMethods": ["generateContent"]},
                {"name": "models/aqa"},
            ]})

        assert _rest(handler).discover_models() == ["gemini-2.5-flash", "gemini-2.0-flash"]

    def test_http_error_returns_empty(self):
        assert _rest(lambda r: _error(403, "leaked")).discover_models() == []

    def test_transport_error_returns_empty(self):
        def handler(request):
            raise httpx.ConnectError("no route to host", request=request)

        assert _rest(handler).discover_models() == []

    def test_malformed_payload_returns_empty(self):
        assert _rest(lambda r: httpx.Response(200, text="<html>")).discover_models() == []
        assert _rest(lambda r: httpx.Response(200, json={"models": "nope"})).discover_models() == []


class TestRestGenerate:
    def test_success_posts_prompt_with_header_key(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return _success("Kickoff is at 8pm.")

        outcome = _rest(handler).generate(ModelCandidate("gemini-2.5-flash", "v1"), "When?")

        assert outcome == Success("Kickoff is at 8pm.")
        assert seen["path"] == "/v1/models/gemini-2.5-flash:generateContent"
        assert seen["key"] == API_KEY
        assert API_KEY not in seen["url"]
        assert seen["body"] == {"contents": [{"parts": [{"text": "When?"}]}]}

    def test_empty_candidates_is_other_error(self):
        outcome = _rest(lambda r: httpx.Response(200, json={"candidates": []})).generate(
            ModelCandidate("m"), "p"
        )
        assert isinstance(outcome, OtherError)

    def test_leaked_key(self):
        handler = lambda r: _error(403, "Your API key was reported as leaked.", "PERMISSION_DENIED")
        outcome = _rest(handler).generate(ModelCandidate("m"), "p")
        assert isinstance(outcome, InvalidKey)
        assert outcome.leaked

    def test_invalid_key_reason(self):
        handler = lambda r: _error(400, "Bad request.", "INVALID_ARGUMENT", reason="API_KEY_INVALID")
        outcome = _rest(handler).generate(ModelCandidate("m"), "p")
        assert isinstance(outcome, InvalidKey)
        assert not outcome.leaked

    def test_rate_limited(self):
        handler = lambda r: _error(429, "Quota exceeded for metric", "RESOURCE_EXHAUSTED")
        assert isinstance(_rest(handler).generate(ModelCandidate("m"), "p"), RateLimited)

    def test_not_found(self):
        handler = lambda r: _error(404, "models/gemini-pro is not found for API version v1", "NOT_FOUND")
        assert isinstance(_rest(handler).generate(ModelCandidate("gemini-pro", "v1"), "p"), NotFound)

    def test_server_error_without_json(self):
        outcome = _rest(lambda r: httpx.Response(503, text="upstream down")).generate(
            ModelCandidate("m"), "p"
        )
        assert outcome == OtherError("upstream down")

    def test_timeout_is_other_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        outcome = _rest(handler).generate(ModelCandidate("m"), "p")
        assert isinstance(outcome, OtherError)
        assert "timed out" in outcome.message


class _FakeApiError(Exception):
    """Mirrors the attributes google.genai.errors.APIError exposes."""

    def __init__(self, code, message, status=None):
        super().__init__(f"{code} {status}. {message}")
        self.code = code
        self.message = message
        self.status = status


class _BlockedResponse:
    @property
    def text(self):
        raise ValueError("response was blocked")


def _sdk_with(generate_side_effect=None, response=None):
    client = MagicMock()
    if generate_side_effect is not None:
        client.models.generate_content.side_effect = generate_side_effect
    else:
        client.models.generate_content.return_value = response
    factory = MagicMock(return_value=client)
    return SdkCompletion(api_key=API_KEY, client_factory=factory), factory, client


class TestSdkGenerate:
    def test_success(self):
        sdk, _, client = _sdk_with(response=MagicMock(text="Haaland."))
        outcome = sdk.generate(ModelCandidate("gemini-2.5-pro", "v1beta"), "Top scorer?")

        assert outcome == Success("Haaland.")
        client.models.generate_content.assert_called_once_with(
            model="gemini-2.5-pro", contents="Top scorer?"
        )

    def test_one_client_per_api_version(self):
        sdk, factory, _ = _sdk_with(response=MagicMock(text="ok"))
        sdk.generate(ModelCandidate("a", "v1beta"), "p")
        sdk.generate(ModelCandidate("b", "v1beta"), "p")
        sdk.generate(ModelCandidate("a", "v1"), "p")

        assert [c.args for c in factory.call_args_list] == [(API_KEY, "v1beta"), (API_KEY, "v1")]

    def test_api_errors_are_classified(self):
        cases = [
            (_FakeApiError(429, "Resource has been exhausted", "RESOURCE_EXHAUSTED"), RateLimited),
            (_FakeApiError(404, "model not found", "NOT_FOUND"), NotFound),
            (_FakeApiError(403, "API key was reported as leaked", "PERMISSION_DENIED"), InvalidKey),
            (_FakeApiError(500, "internal", "INTERNAL"), OtherError),
        ]
        for exc, expected in cases:
            sdk, _, _ = _sdk_with(generate_side_effect=exc)
            assert isinstance(sdk.generate(ModelCandidate("m"), "p"), expected)

    def test_plain_exception_is_other_error(self):
        sdk, _, _ = _sdk_with(generate_side_effect=ConnectionError("reset by peer"))
        assert sdk.generate(ModelCandidate("m"), "p") == OtherError("reset by peer")

    def test_blocked_response_is_other_error(self):
        sdk, _, _ = _sdk_with(response=_BlockedResponse())
        assert isinstance(sdk.generate(ModelCandidate("m"), "p"), OtherError)

    def test_close_closes_clients(self):
        sdk, _, client = _sdk_with(response=MagicMock(text="ok"))
        sdk.generate(ModelCandidate("m"), "p")
        sdk.close()
        client.close.assert_called_once()
