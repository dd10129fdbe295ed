from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from caption_genius.core.config import settings
from caption_genius.core.db import SessionLocal
from caption_genius.core.errors import (
    CaptionPersistFailed,
    ConfigurationLookupFailed,
    InsufficientCredits,
    InvalidNiche,
    ProviderUnauthorized,
    QuotaExceeded,
    UsageLookupFailed,
    ValidationError,
)
from caption_genius.modules.captions.models import Caption
from caption_genius.modules.customization.service import activate_configuration
from caption_genius.modules.generation import service as generation_service
from caption_genius.modules.identity.models import Profile
from caption_genius.modules.identity.service import create_user
from caption_genius.modules.usage.models import UsageLog
from caption_genius.modules.usage import service as usage_service
from caption_genius.modules.usage.service import record_usage

TEXT = "New seasonal latte launch this Friday"


def _usage_count(session, user_id) -> int:
    return session.scalar(select(func.count()).select_from(UsageLog).where(UsageLog.user_id == user_id))


def test_generate_caption_stores_caption_and_logs_usage(stub_completion):
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")

        outcome = generation_service.generate_caption(
            session, user=user, niche="Indie Coffee Shop", text=TEXT
        )

        assert outcome.text == "Fresh beans, fresh start. #coffee"
        assert outcome.warnings == []
        stored = session.get(Caption, outcome.caption.id)
        assert stored is not None
        assert stored.prompt == TEXT
        assert stored.generated_caption == outcome.text
        assert stored.niche.name == "Indie Coffee Shop"
        assert stored.is_favorite is False
        assert _usage_count(session, user.id) == 1

        entry = session.scalar(select(UsageLog).where(UsageLog.user_id == user.id))
        assert entry.action_type == "caption_generation"
        assert entry.credits_used == 1
        assert entry.details == {"niche": "Indie Coffee Shop", "model": "gpt-4o-mini"}

    assert len(stub_completion) == 1
    assert "for a Indie Coffee Shop business" in stub_completion[0]


def test_active_configuration_shapes_prompt(stub_completion):
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        activate_configuration(
            session,
            user_id=user.id,
            purpose="Fill the morning classes",
            tone="Calm",
            preferences="No hashtags in the middle",
        )
        generation_service.generate_caption(session, user=user, niche="Yoga Studio", text=TEXT)

    assert "Purpose: Fill the morning classes." in stub_completion[0]
    assert "Tone: Calm." in stub_completion[0]


def test_invalid_request_never_reaches_provider(stub_completion):
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(ValidationError):
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text="too short"
            )
        assert _usage_count(session, user.id) == 0
    assert stub_completion == []


def test_quota_exhausted_never_reaches_provider(stub_completion, monkeypatch):
    monkeypatch.setattr(settings, "daily_caption_quota", 2)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        record_usage(session, user_id=user.id)
        record_usage(session, user_id=user.id)

        with pytest.raises(QuotaExceeded):
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )
        assert session.scalar(select(func.count()).select_from(Caption)) == 0
    assert stub_completion == []


def test_metered_user_without_credits_never_reaches_provider(stub_completion):
    with SessionLocal() as session:
        user = create_user(
            session,
            email="owner@example.com",
            password="password1",
            credits_remaining=0,
            subscription_plan_id="starter",
        )
        with pytest.raises(InsufficientCredits):
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )
    assert stub_completion == []


def test_credit_is_decremented_after_success(stub_completion):
    with SessionLocal() as session:
        user = create_user(
            session,
            email="owner@example.com",
            password="password1",
            credits_remaining=3,
            subscription_plan_id="starter",
        )
        generation_service.generate_caption(session, user=user, niche="Yoga Studio", text=TEXT)

        profile = session.scalar(select(Profile).where(Profile.user_id == user.id))
        session.refresh(profile)
        assert profile.credits_remaining == 2


def test_unknown_niche_fails_after_completion_without_usage(stub_completion):
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(InvalidNiche) as exc:
            generation_service.generate_caption(
                session, user=user, niche="Underwater Basket Weaving", text=TEXT
            )
        assert exc.value.status_code == 400
        assert _usage_count(session, user.id) == 0
    assert len(stub_completion) == 1


def test_provider_failure_stores_nothing(monkeypatch):
    def _reject(prompt, *, model=None):
        raise ProviderUnauthorized("401 from provider")

    monkeypatch.setattr(generation_service, "request_caption", _reject)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(ProviderUnauthorized):
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )
        assert session.scalar(select(func.count()).select_from(Caption)) == 0
        assert _usage_count(session, user.id) == 0


def test_usage_log_failure_is_reported_as_warning(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("INSERT INTO usage_log", {}, Exception("disk full"))

    monkeypatch.setattr(generation_service, "record_usage", _fail)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        outcome = generation_service.generate_caption(
            session, user=user, niche="Yoga Studio", text=TEXT
        )
        assert outcome.warnings == [generation_service.WARNING_USAGE_LOG]
        assert session.get(Caption, outcome.caption.id) is not None


def test_credit_failure_is_reported_as_warning(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("UPDATE identity_profile", {}, Exception("locked"))

    monkeypatch.setattr(generation_service, "consume_credit", _fail)
    with SessionLocal() as session:
        user = create_user(
            session, email="owner@example.com", password="password1", credits_remaining=1
        )
        outcome = generation_service.generate_caption(
            session, user=user, niche="Yoga Studio", text=TEXT
        )
        assert outcome.warnings == [generation_service.WARNING_CREDIT]
        assert _usage_count(session, user.id) == 1


def test_usage_store_fault_fails_closed(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("SELECT count(*) FROM usage_log", {}, Exception("db down"))

    monkeypatch.setattr(usage_service, "count_recent_actions", _fail)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(UsageLookupFailed) as exc:
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )

    assert exc.value.status_code == 500
    assert exc.value.to_payload() == {"error": "Unable to verify usage limits"}
    assert stub_completion == []


def test_caption_insert_failure_is_fatal(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("INSERT INTO captions_caption", {}, Exception("disk full"))

    monkeypatch.setattr(generation_service, "create_caption", _fail)
    with SessionLocal() as session:
        user = create_user(
            session, email="owner@example.com", password="password1", credits_remaining=2
        )
        with pytest.raises(CaptionPersistFailed) as exc:
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )
        assert exc.value.status_code == 500
        assert _usage_count(session, user.id) == 0

        profile = session.scalar(select(Profile).where(Profile.user_id == user.id))
        assert profile.credits_remaining == 2
    assert len(stub_completion) == 1


def test_niche_lookup_fault_is_a_persist_failure(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("SELECT niches_niche", {}, Exception("db down"))

    monkeypatch.setattr(generation_service, "resolve_niche", _fail)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(CaptionPersistFailed):
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )
        assert _usage_count(session, user.id) == 0


def test_configuration_fault_stops_before_provider(stub_completion, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise OperationalError("SELECT customization_ai_configuration", {}, Exception("db down"))

    monkeypatch.setattr(generation_service, "get_active_configuration", _fail)
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        with pytest.raises(ConfigurationLookupFailed) as exc:
            generation_service.generate_caption(
                session, user=user, niche="Yoga Studio", text=TEXT
            )

    assert exc.value.to_payload() == {"error": "Unable to load AI configuration"}
    assert stub_completion == []


def test_identical_requests_produce_distinct_captions(stub_completion):
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        first = generation_service.generate_caption(
            session, user=user, niche="Yoga Studio", text=TEXT
        )
        second = generation_service.generate_caption(
            session, user=user, niche="Yoga Studio", text=TEXT
        )

        assert first.caption.id != second.caption.id
        assert session.scalar(select(func.count()).select_from(Caption)) == 2
        assert _usage_count(session, user.id) == 2
    assert len(stub_completion) == 2
