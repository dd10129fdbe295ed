from __future__ import annotations

import httpx
import pytest

from caption_genius.core.config import settings
from caption_genius.core.errors import (
    GenerationFailed,
    ProviderError,
    ProviderNotConfigured,
    ProviderUnauthorized,
)
from caption_genius.modules.generation import completion
from caption_genius.modules.generation.prompts import SYSTEM_INSTRUCTION


def _fake_post(status_code: int, *, body=None, content: bytes | None = None, calls=None):
    def _post(url, *, headers, json, timeout, follow_redirects):
        if calls is not None:
            calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        request = httpx.Request("POST", url)
        if content is not None:
            return httpx.Response(status_code, content=content, request=request)
        return httpx.Response(status_code, json=body, request=request)

    return _post


def test_request_caption_returns_first_choice(monkeypatch):
    calls: list[dict] = []
    body = {
        "model": "gpt-4o-mini-2024-07-18",
        "choices": [
            {"message": {"role": "assistant", "content": "  Sip slow. #coffee  "}},
            {"message": {"role": "assistant", "content": "ignored"}},
        ],
    }
    monkeypatch.setattr(completion.httpx, "post", _fake_post(200, body=body, calls=calls))

    result = completion.request_caption("a prompt")

    assert result.text == "Sip slow. #coffee"
    assert result.model == "gpt-4o-mini-2024-07-18"
    assert len(calls) == 1
    sent = calls[0]
    assert sent["url"].endswith("/chat/completions")
    assert sent["headers"]["Authorization"] == "Bearer test-key"
    assert sent["json"]["model"] == settings.openai_model
    assert sent["json"]["temperature"] == 0.7
    assert sent["json"]["max_tokens"] == 150
    assert sent["json"]["messages"][0] == {"role": "system", "content": SYSTEM_INSTRUCTION}
    assert sent["json"]["messages"][1] == {"role": "user", "content": "a prompt"}


def test_request_caption_without_key_never_calls_provider(monkeypatch):
    calls: list[dict] = []
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(completion.httpx, "post", _fake_post(200, body={}, calls=calls))

    with pytest.raises(ProviderNotConfigured):
        completion.request_caption("a prompt")
    assert calls == []


def test_unauthorized_status_maps_to_provider_unauthorized(monkeypatch):
    body = {"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}}
    monkeypatch.setattr(completion.httpx, "post", _fake_post(401, body=body))

    with pytest.raises(ProviderUnauthorized) as exc:
        completion.request_caption("a prompt")
    assert exc.value.status_code == 401
    assert exc.value.to_payload() == {"error": "Invalid OpenAI API key"}


def test_invalid_key_code_maps_to_provider_unauthorized(monkeypatch):
    body = {"error": {"message": "bad key", "code": "invalid_api_key"}}
    monkeypatch.setattr(completion.httpx, "post", _fake_post(403, body=body))

    with pytest.raises(ProviderUnauthorized):
        completion.request_caption("a prompt")


def test_other_status_maps_to_generic_provider_error(monkeypatch):
    monkeypatch.setattr(completion.httpx, "post", _fake_post(500, body={"error": {}}))

    with pytest.raises(ProviderError) as exc:
        completion.request_caption("a prompt")
    assert exc.value.status_code == 500
    assert exc.value.to_payload() == {"error": "Failed to generate caption"}


def test_transport_error_maps_to_provider_error(monkeypatch):
    def _boom(url, **_kwargs):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(completion.httpx, "post", _boom)

    with pytest.raises(ProviderError):
        completion.request_caption("a prompt")


@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"choices": [{"message": {"content": "   "}}]},
        {"choices": [{"message": {}}]},
        {"unexpected": True},
    ],
)
def test_empty_choice_is_generation_failure(monkeypatch, body):
    monkeypatch.setattr(completion.httpx, "post", _fake_post(200, body=body))

    with pytest.raises(GenerationFailed):
        completion.request_caption("a prompt")


def test_non_json_body_is_generation_failure(monkeypatch):
    monkeypatch.setattr(completion.httpx, "post", _fake_post(200, content=b"<html>oops</html>"))

    with pytest.raises(GenerationFailed):
        completion.request_caption("a prompt")
