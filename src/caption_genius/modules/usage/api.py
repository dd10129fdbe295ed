from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.config import settings
from caption_genius.core.db import db_session
from caption_genius.modules.identity.models import User
from caption_genius.modules.usage.schemas import UsageSummaryOut
from caption_genius.modules.usage.service import read_allowance

router = APIRouter(tags=["usage"])


@router.get("/usage", response_model=UsageSummaryOut)
def usage_summary_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> UsageSummaryOut:
    allowance = read_allowance(
        session,
        user_id=user.id,
        quota=settings.daily_caption_quota,
        window_hours=settings.quota_window_hours,
    )
    return UsageSummaryOut(
        used=allowance.used,
        quota=allowance.quota,
        remaining=allowance.remaining,
        window_hours=allowance.window_hours,
        credits_remaining=allowance.credits_remaining,
        metered=allowance.metered,
    )
