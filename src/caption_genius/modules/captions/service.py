from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from caption_genius.core.models import utcnow
from caption_genius.modules.captions.models import Caption
from caption_genius.modules.identity.models import User
from caption_genius.modules.niches.models import Niche

RECENT_CAPTIONS_LIMIT = 5
MAX_PAGE_SIZE = 100


def create_caption(
    session: Session,
    *,
    user_id: uuid.UUID,
    niche_id: uuid.UUID,
    prompt: str,
    generated_caption: str,
) -> Caption:
    if not prompt:
        raise ValueError("prompt is required")
    if not generated_caption:
        raise ValueError("generated_caption is required")

    caption = Caption(
        user_id=user_id,
        niche_id=niche_id,
        prompt=prompt,
        generated_caption=generated_caption,
        is_favorite=False,
        usage_count=0,
    )
    session.add(caption)
    session.commit()
    session.refresh(caption)
    return caption


def list_captions(
    session: Session,
    *,
    user_id: uuid.UUID,
    niche: str | None = None,
    favorites_only: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> list[Caption]:
    stmt = select(Caption).where(Caption.user_id == user_id)
    if niche:
        stmt = stmt.join(Niche, Niche.id == Caption.niche_id).where(Niche.name == niche)
    if favorites_only:
        stmt = stmt.where(Caption.is_favorite.is_(True))
    stmt = (
        stmt.order_by(Caption.created_at.desc())
        .offset(max(offset, 0))
        .limit(min(max(limit, 1), MAX_PAGE_SIZE))
    )
    return list(session.scalars(stmt).unique())


def recent_captions(
    session: Session, *, user_id: uuid.UUID, limit: int = RECENT_CAPTIONS_LIMIT
) -> list[Caption]:
    return list_captions(session, user_id=user_id, limit=limit)


def get_caption_for_user(session: Session, *, caption_id: uuid.UUID, user: User) -> Caption:
    caption = session.scalar(select(Caption).where(Caption.id == caption_id))
    if not caption:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Caption not found")
    if caption.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    return caption


def set_favorite(session: Session, *, caption: Caption, is_favorite: bool) -> Caption:
    caption.is_favorite = is_favorite
    session.add(caption)
    session.commit()
    session.refresh(caption)
    return caption


def mark_caption_used(session: Session, *, caption: Caption, commit: bool = True) -> Caption:
    caption.usage_count = (caption.usage_count or 0) + 1
    caption.last_used_at = utcnow()
    session.add(caption)
    if commit:
        session.commit()
        session.refresh(caption)
    return caption


def delete_caption(session: Session, *, caption: Caption) -> None:
    from caption_genius.modules.scheduling.models import ScheduledPost

    session.execute(delete(ScheduledPost).where(ScheduledPost.caption_id == caption.id))
    session.delete(caption)
    session.commit()
