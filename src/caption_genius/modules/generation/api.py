from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.db import db_session
from caption_genius.modules.generation.schemas import CaptionRequest, CaptionResponse
from caption_genius.modules.generation.service import generate_caption
from caption_genius.modules.identity.models import User

router = APIRouter(tags=["generation"])


@router.post("/generate-caption", response_model=CaptionResponse)
def generate_caption_endpoint(
    payload: CaptionRequest,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> CaptionResponse:
    outcome = generate_caption(session, user=user, niche=payload.niche, text=payload.input)
    return CaptionResponse(
        caption=outcome.text,
        caption_id=outcome.caption.id,
        warnings=outcome.warnings,
    )
