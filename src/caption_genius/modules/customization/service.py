from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from caption_genius.core.logging import get_logger, log_event
from caption_genius.modules.customization.models import AIConfiguration

logger = get_logger(__name__)


def get_active_configuration(session: Session, *, user_id: uuid.UUID) -> AIConfiguration | None:
    return session.scalar(
        select(AIConfiguration)
        .where(AIConfiguration.user_id == user_id, AIConfiguration.is_active.is_(True))
        .order_by(AIConfiguration.created_at.desc())
        .limit(1)
    )


def list_configurations(session: Session, *, user_id: uuid.UUID) -> list[AIConfiguration]:
    return list(
        session.scalars(
            select(AIConfiguration)
            .where(AIConfiguration.user_id == user_id)
            .order_by(AIConfiguration.created_at.desc())
        )
    )


def _deactivate_all(session: Session, *, user_id: uuid.UUID) -> int:
    result = session.execute(
        update(AIConfiguration)
        .where(AIConfiguration.user_id == user_id, AIConfiguration.is_active.is_(True))
        .values(is_active=False)
    )
    return int(result.rowcount or 0)


def activate_configuration(
    session: Session,
    *,
    user_id: uuid.UUID,
    purpose: str,
    tone: str,
    preferences: str,
    additional_traits: str | None = None,
    niche_vocabulary: list[str] | None = None,
    sample_posts: list[str] | None = None,
) -> AIConfiguration:
    # Deactivation and insert share one transaction.
    replaced = _deactivate_all(session, user_id=user_id)
    config = AIConfiguration(
        user_id=user_id,
        purpose=purpose,
        tone=tone,
        preferences=preferences,
        additional_traits=additional_traits or None,
        niche_vocabulary=list(niche_vocabulary or []),
        sample_posts=list(sample_posts or []),
        is_active=True,
    )
    session.add(config)
    session.commit()
    session.refresh(config)
    log_event(
        logger,
        "customization.configuration.activated",
        configuration_id=str(config.id),
        replaced=replaced,
    )
    return config


def deactivate_configuration(session: Session, *, user_id: uuid.UUID) -> int:
    replaced = _deactivate_all(session, user_id=user_id)
    session.commit()
    log_event(logger, "customization.configuration.deactivated", replaced=replaced)
    return replaced
