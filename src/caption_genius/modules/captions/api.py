from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.db import db_session
from caption_genius.modules.captions.schemas import CaptionOut, CaptionUpdate
from caption_genius.modules.captions.service import (
    MAX_PAGE_SIZE,
    delete_caption,
    get_caption_for_user,
    list_captions,
    recent_captions,
    set_favorite,
)
from caption_genius.modules.identity.models import User

router = APIRouter(tags=["captions"])


@router.get("/captions", response_model=list[CaptionOut])
def list_captions_endpoint(
    niche: str | None = None,
    favorite: bool = False,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=MAX_PAGE_SIZE),
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[CaptionOut]:
    captions = list_captions(
        session,
        user_id=user.id,
        niche=niche,
        favorites_only=favorite,
        offset=offset,
        limit=limit,
    )
    return [CaptionOut.from_caption(c) for c in captions]


@router.get("/captions/recent", response_model=list[CaptionOut])
def recent_captions_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[CaptionOut]:
    return [CaptionOut.from_caption(c) for c in recent_captions(session, user_id=user.id)]


@router.get("/captions/{caption_id}", response_model=CaptionOut)
def get_caption_endpoint(
    caption_id: uuid.UUID,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> CaptionOut:
    return CaptionOut.from_caption(get_caption_for_user(session, caption_id=caption_id, user=user))


@router.patch("/captions/{caption_id}", response_model=CaptionOut)
def update_caption_endpoint(
    caption_id: uuid.UUID,
    payload: CaptionUpdate,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> CaptionOut:
    caption = get_caption_for_user(session, caption_id=caption_id, user=user)
    if payload.is_favorite is not None:
        caption = set_favorite(session, caption=caption, is_favorite=payload.is_favorite)
    return CaptionOut.from_caption(caption)


@router.delete("/captions/{caption_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_caption_endpoint(
    caption_id: uuid.UUID,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> None:
    caption = get_caption_for_user(session, caption_id=caption_id, user=user)
    delete_caption(session, caption=caption)
