from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from caption_genius.core.errors import InsufficientCredits, QuotaExceeded, UsageLookupFailed
from caption_genius.core.logging import get_logger, log_exception
from caption_genius.modules.identity.models import Profile
from caption_genius.modules.usage.models import ACTION_CAPTION_GENERATION, UsageLog

logger = get_logger(__name__)


@dataclass(frozen=True)
class Allowance:
    used: int
    quota: int
    window_hours: int
    credits_remaining: int
    metered: bool

    @property
    def remaining(self) -> int:
        return max(self.quota - self.used, 0)


def count_recent_actions(
    session: Session,
    *,
    user_id: uuid.UUID,
    action_type: str = ACTION_CAPTION_GENERATION,
    window_hours: int = 24,
    now: datetime | None = None,
) -> int:
    since = (now or datetime.now(UTC)) - timedelta(hours=window_hours)
    count = session.scalar(
        select(func.count())
        .select_from(UsageLog)
        .where(
            UsageLog.user_id == user_id,
            UsageLog.action_type == action_type,
            UsageLog.created_at >= since,
        )
    )
    return int(count or 0)


def read_allowance(
    session: Session,
    *,
    user_id: uuid.UUID,
    quota: int,
    window_hours: int,
    now: datetime | None = None,
) -> Allowance:
    """Read the caller's usage in the window and their credit balance.

    Store failures raise UsageLookupFailed: the limiter never fails open.
    """
    try:
        used = count_recent_actions(
            session, user_id=user_id, window_hours=window_hours, now=now
        )
        profile = session.scalar(select(Profile).where(Profile.user_id == user_id))
    except SQLAlchemyError as e:
        session.rollback()
        log_exception(logger, "usage.lookup.failed", checked_user_id=str(user_id))
        raise UsageLookupFailed(str(e)) from e

    return Allowance(
        used=used,
        quota=quota,
        window_hours=window_hours,
        credits_remaining=int(profile.credits_remaining or 0) if profile else 0,
        metered=bool(profile and profile.is_metered),
    )


def check_generation_allowance(
    session: Session,
    *,
    user_id: uuid.UUID,
    quota: int,
    window_hours: int,
    now: datetime | None = None,
) -> Allowance:
    allowance = read_allowance(
        session, user_id=user_id, quota=quota, window_hours=window_hours, now=now
    )
    if allowance.used >= allowance.quota:
        raise QuotaExceeded(used=allowance.used, quota=allowance.quota, window_hours=window_hours)
    if allowance.metered and allowance.credits_remaining <= 0:
        raise InsufficientCredits(balance=allowance.credits_remaining)
    return allowance


def record_usage(
    session: Session,
    *,
    user_id: uuid.UUID,
    action_type: str = ACTION_CAPTION_GENERATION,
    credits_used: int = 1,
    details: dict[str, Any] | None = None,
) -> UsageLog:
    entry = UsageLog(
        user_id=user_id,
        action_type=action_type,
        credits_used=credits_used,
        details=details,
    )
    session.add(entry)
    session.commit()
    return entry


def consume_credit(session: Session, *, user_id: uuid.UUID) -> bool:
    """Decrement the balance by one unless it is already exhausted.

    A single conditional UPDATE, so concurrent generations cannot push the
    balance below zero. Returns False when no credit was left to take.
    """
    result = session.execute(
        update(Profile)
        .where(Profile.user_id == user_id, Profile.credits_remaining > 0)
        .values(credits_remaining=Profile.credits_remaining - 1)
        .execution_options(synchronize_session=False)
    )
    session.commit()
    return int(result.rowcount or 0) == 1
