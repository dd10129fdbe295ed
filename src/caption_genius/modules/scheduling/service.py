from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from caption_genius.core.logging import get_logger, log_event
from caption_genius.core.models import as_utc, utcnow
from caption_genius.modules.captions.service import get_caption_for_user, mark_caption_used
from caption_genius.modules.identity.models import User
from caption_genius.modules.scheduling.models import (
    ContentType,
    Platform,
    PostStatus,
    ScheduledPost,
)

logger = get_logger(__name__)

UPCOMING_LIMIT = 5


@dataclass(frozen=True)
class ContentMixEntry:
    content_type: ContentType
    count: int
    percentage: float


def _utc_range(
    start: datetime | None, end: datetime | None
) -> tuple[datetime | None, datetime | None]:
    # SQLite keeps only the wall-clock part, so every stored or compared time is UTC.
    start = as_utc(start) if start else None
    end = as_utc(end) if end else None
    if start and end and end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="end must not be before start"
        )
    return start, end


def create_scheduled_post(
    session: Session,
    *,
    user: User,
    caption_id: uuid.UUID,
    scheduled_time: datetime,
    platform: Platform,
    content_type: ContentType,
) -> ScheduledPost:
    caption = get_caption_for_user(session, caption_id=caption_id, user=user)
    post = ScheduledPost(
        user_id=user.id,
        caption_id=caption.id,
        scheduled_time=as_utc(scheduled_time),
        platform=platform,
        content_type=content_type,
        status=PostStatus.SCHEDULED,
        retry_count=0,
    )
    session.add(post)
    mark_caption_used(session, caption=caption, commit=False)
    session.commit()
    session.refresh(post)
    log_event(
        logger,
        "scheduling.post.created",
        post_id=str(post.id),
        caption_id=str(caption.id),
        platform=platform.value,
    )
    return post


def get_scheduled_post_for_user(
    session: Session, *, post_id: uuid.UUID, user: User
) -> ScheduledPost:
    post = session.scalar(select(ScheduledPost).where(ScheduledPost.id == post_id))
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    if post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    return post


def update_scheduled_post(
    session: Session, *, post: ScheduledPost, user: User, **changes
) -> ScheduledPost:
    for field, value in changes.items():
        if value is None:
            continue
        if field == "caption_id" and value != post.caption_id:
            caption = get_caption_for_user(session, caption_id=value, user=user)
            mark_caption_used(session, caption=caption, commit=False)
        if field == "scheduled_time":
            value = as_utc(value)
        setattr(post, field, value)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post


def delete_scheduled_post(session: Session, *, post: ScheduledPost) -> None:
    session.delete(post)
    session.commit()


def list_scheduled_posts(
    session: Session,
    *,
    user_id: uuid.UUID,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[ScheduledPost]:
    start, end = _utc_range(start, end)
    stmt = select(ScheduledPost).where(ScheduledPost.user_id == user_id)
    if start:
        stmt = stmt.where(ScheduledPost.scheduled_time >= start)
    if end:
        stmt = stmt.where(ScheduledPost.scheduled_time <= end)
    return list(session.scalars(stmt.order_by(ScheduledPost.scheduled_time.asc())).unique())


def upcoming_posts(
    session: Session,
    *,
    user_id: uuid.UUID,
    limit: int = UPCOMING_LIMIT,
    now: datetime | None = None,
) -> list[ScheduledPost]:
    stmt = (
        select(ScheduledPost)
        .where(
            ScheduledPost.user_id == user_id,
            ScheduledPost.status == PostStatus.SCHEDULED,
            ScheduledPost.scheduled_time >= as_utc(now or utcnow()),
        )
        .order_by(ScheduledPost.scheduled_time.asc())
        .limit(limit)
    )
    return list(session.scalars(stmt).unique())


def content_mix(
    session: Session,
    *,
    user_id: uuid.UUID,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[ContentMixEntry]:
    """Count scheduled posts per content type; every type is always listed."""
    start, end = _utc_range(start, end)
    stmt = (
        select(ScheduledPost.content_type, func.count())
        .where(ScheduledPost.user_id == user_id)
        .group_by(ScheduledPost.content_type)
    )
    if start:
        stmt = stmt.where(ScheduledPost.scheduled_time >= start)
    if end:
        stmt = stmt.where(ScheduledPost.scheduled_time <= end)
    counts = {content_type: int(n) for content_type, n in session.execute(stmt)}

    total = sum(counts.values())
    return [
        ContentMixEntry(
            content_type=ct,
            count=counts.get(ct, 0),
            percentage=(counts.get(ct, 0) / total * 100.0) if total else 0.0,
        )
        for ct in ContentType
    ]
