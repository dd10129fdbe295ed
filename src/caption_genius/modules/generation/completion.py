from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import httpx

from caption_genius.core.config import settings
from caption_genius.core.errors import (
    GenerationFailed,
    ProviderError,
    ProviderNotConfigured,
    ProviderUnauthorized,
)
from caption_genius.core.logging import get_logger, log_event, monotonic_ms
from caption_genius.modules.generation.prompts import build_messages

logger = get_logger(__name__)

_UNAUTHORIZED_CODES = {"invalid_api_key", "invalid_authentication"}


@dataclass(frozen=True)
class Completion:
    text: str
    model: str


def request_caption(prompt: str, *, model: str | None = None) -> Completion:
    """Send one chat completion request and return the first choice's text.

    Not retried: every call is billed by the provider.
    """
    if not settings.openai_api_key:
        raise ProviderNotConfigured()

    model_name = model or settings.openai_model
    payload: dict[str, Any] = {
        "model": model_name,
        "messages": build_messages(prompt),
        "temperature": settings.caption_temperature,
        "max_tokens": settings.caption_max_tokens,
    }
    headers = {
        "Authorization": f"Bearer {settings.openai_api_key}",
        "Content-Type": "application/json",
    }
    url = settings.openai_base_url.rstrip("/") + "/chat/completions"

    start = time.monotonic()
    try:
        resp = httpx.post(
            url,
            headers=headers,
            json=payload,
            timeout=float(settings.openai_timeout_seconds or 30.0),
            follow_redirects=True,
        )
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        log_event(
            logger,
            "completion.error",
            model=model_name,
            status_code=e.response.status_code,
            duration_ms=monotonic_ms(start),
        )
        if _is_unauthorized_response(e.response):
            raise ProviderUnauthorized(str(e)) from e
        raise ProviderError(str(e)) from e
    except httpx.HTTPError as e:
        log_event(
            logger,
            "completion.error",
            model=model_name,
            error=type(e).__name__,
            duration_ms=monotonic_ms(start),
        )
        # No response to inspect; fall back to the message text.
        if "401" in str(e):
            raise ProviderUnauthorized(str(e)) from e
        raise ProviderError(str(e)) from e

    log_event(
        logger,
        "completion.request",
        model=model_name,
        status_code=resp.status_code,
        duration_ms=monotonic_ms(start),
    )

    try:
        raw = resp.json()
    except ValueError as e:
        raise GenerationFailed("Provider returned a non-JSON body") from e

    text = extract_first_choice_text(raw)
    if not text:
        raise GenerationFailed("Provider returned no caption text")
    used_model = raw.get("model") if isinstance(raw, dict) else None
    return Completion(text=text, model=str(used_model or model_name))


def extract_first_choice_text(raw: Any) -> str | None:
    if not isinstance(raw, dict):
        return None
    choices = raw.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    msg = first.get("message") if isinstance(first, dict) else None
    content = msg.get("content") if isinstance(msg, dict) else None
    if not isinstance(content, str):
        return None
    return content.strip() or None


def _is_unauthorized_response(resp: httpx.Response) -> bool:
    if resp.status_code == 401:
        return True
    try:
        body = resp.json()
    except ValueError:
        return False
    error = body.get("error") if isinstance(body, dict) else None
    code = error.get("code") if isinstance(error, dict) else None
    return code in _UNAUTHORIZED_CODES
