from __future__ import annotations

from sqlalchemy import select

from caption_genius.core.db import SessionLocal
from caption_genius.modules.customization.models import AIConfiguration
from caption_genius.modules.customization.service import (
    activate_configuration,
    deactivate_configuration,
    get_active_configuration,
    list_configurations,
)
from caption_genius.modules.identity.service import create_user


def test_activating_a_configuration_replaces_the_previous_one():
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        first = activate_configuration(
            session, user_id=user.id, purpose="Sell", tone="Bold", preferences="Short"
        )
        second = activate_configuration(
            session,
            user_id=user.id,
            purpose="Educate",
            tone="Friendly",
            preferences="Long form",
            niche_vocabulary=["vinyasa"],
        )

        active = session.scalars(
            select(AIConfiguration).where(
                AIConfiguration.user_id == user.id, AIConfiguration.is_active.is_(True)
            )
        ).all()
        assert [c.id for c in active] == [second.id]
        assert get_active_configuration(session, user_id=user.id).niche_vocabulary == ["vinyasa"]

        session.refresh(first)
        assert first.is_active is False
        assert len(list_configurations(session, user_id=user.id)) == 2


def test_configurations_are_scoped_per_user():
    with SessionLocal() as session:
        owner = create_user(session, email="owner@example.com", password="password1")
        other = create_user(session, email="other@example.com", password="password1")
        activate_configuration(
            session, user_id=owner.id, purpose="Sell", tone="Bold", preferences="Short"
        )
        activate_configuration(
            session, user_id=other.id, purpose="Inform", tone="Dry", preferences="Plain"
        )

        assert get_active_configuration(session, user_id=owner.id).tone == "Bold"
        assert get_active_configuration(session, user_id=other.id).tone == "Dry"


def test_deactivate_leaves_no_active_configuration():
    with SessionLocal() as session:
        user = create_user(session, email="owner@example.com", password="password1")
        activate_configuration(
            session, user_id=user.id, purpose="Sell", tone="Bold", preferences="Short"
        )
        assert deactivate_configuration(session, user_id=user.id) == 1
        assert get_active_configuration(session, user_id=user.id) is None


def test_configuration_api_round_trip():
    from fastapi.testclient import TestClient

    from caption_genius.main import app

    client = TestClient(app)
    token = client.post(
        "/api/auth/register", json={"email": "owner@example.com", "password": "password1"}
    ).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/ai-configuration", headers=headers).json() is None

    resp = client.put(
        "/api/ai-configuration",
        json={
            "purpose": "Book more classes",
            "tone": "Calm",
            "preferences": "One emoji",
            "sample_posts": ["Breathe in.", "  "],
        },
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["sample_posts"] == ["Breathe in."]

    resp = client.put("/api/ai-configuration", json={"purpose": "", "tone": "x"}, headers=headers)
    assert resp.status_code == 422

    assert client.delete("/api/ai-configuration", headers=headers).status_code == 204
    assert client.get("/api/ai-configuration", headers=headers).json() is None
