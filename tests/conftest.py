from __future__ import annotations

import os

import pytest

# Set env before any caption_genius imports (settings/engine are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.caption_genius_test.db")
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("DAILY_CAPTION_QUOTA", "30")


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    import caption_genius.models  # noqa: F401
    from caption_genius.core.db import SessionLocal, engine
    from caption_genius.core.logging import set_user_context
    from caption_genius.core.models import Base
    from caption_genius.modules.niches.service import seed_default_niches

    # Reset DB schema
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    with SessionLocal() as session:
        seed_default_niches(session)

    set_user_context(None)
    yield


@pytest.fixture
def stub_completion(monkeypatch):
    """Replace the provider call with a canned caption and record prompts."""
    from caption_genius.modules.generation import service as generation_service
    from caption_genius.modules.generation.completion import Completion

    prompts: list[str] = []

    def _stub(prompt: str, *, model: str | None = None) -> Completion:
        prompts.append(prompt)
        return Completion(text="Fresh beans, fresh start. #coffee", model="gpt-4o-mini")

    monkeypatch.setattr(generation_service, "request_caption", _stub)
    return prompts
