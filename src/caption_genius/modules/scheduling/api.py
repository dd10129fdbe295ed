from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.db import db_session
from caption_genius.modules.identity.models import User
from caption_genius.modules.scheduling.schemas import (
    ContentMixOut,
    ScheduledPostCreate,
    ScheduledPostOut,
    ScheduledPostUpdate,
)
from caption_genius.modules.scheduling.service import (
    content_mix,
    create_scheduled_post,
    delete_scheduled_post,
    get_scheduled_post_for_user,
    list_scheduled_posts,
    upcoming_posts,
    update_scheduled_post,
)

router = APIRouter(tags=["scheduling"])


@router.post(
    "/scheduled-posts", response_model=ScheduledPostOut, status_code=status.HTTP_201_CREATED
)
def create_scheduled_post_endpoint(
    payload: ScheduledPostCreate,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> ScheduledPostOut:
    post = create_scheduled_post(session, user=user, **payload.model_dump())
    return ScheduledPostOut.from_post(post)


@router.get("/scheduled-posts", response_model=list[ScheduledPostOut])
def list_scheduled_posts_endpoint(
    start: datetime | None = None,
    end: datetime | None = None,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[ScheduledPostOut]:
    posts = list_scheduled_posts(session, user_id=user.id, start=start, end=end)
    return [ScheduledPostOut.from_post(p) for p in posts]


@router.get("/scheduled-posts/upcoming", response_model=list[ScheduledPostOut])
def upcoming_posts_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[ScheduledPostOut]:
    return [ScheduledPostOut.from_post(p) for p in upcoming_posts(session, user_id=user.id)]


@router.get("/scheduled-posts/content-mix", response_model=list[ContentMixOut])
def content_mix_endpoint(
    start: datetime | None = None,
    end: datetime | None = None,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[ContentMixOut]:
    entries = content_mix(session, user_id=user.id, start=start, end=end)
    return [
        ContentMixOut(content_type=e.content_type, count=e.count, percentage=e.percentage)
        for e in entries
    ]


@router.patch("/scheduled-posts/{post_id}", response_model=ScheduledPostOut)
def update_scheduled_post_endpoint(
    post_id: uuid.UUID,
    payload: ScheduledPostUpdate,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> ScheduledPostOut:
    post = get_scheduled_post_for_user(session, post_id=post_id, user=user)
    updated = update_scheduled_post(
        session, post=post, user=user, **payload.model_dump(exclude_unset=True)
    )
    return ScheduledPostOut.from_post(updated)


@router.delete("/scheduled-posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scheduled_post_endpoint(
    post_id: uuid.UUID,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> None:
    post = get_scheduled_post_for_user(session, post_id=post_id, user=user)
    delete_scheduled_post(session, post=post)
