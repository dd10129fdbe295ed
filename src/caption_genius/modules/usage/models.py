from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from caption_genius.core.models import Base, UUIDPrimaryKey, utcnow

ACTION_CAPTION_GENERATION = "caption_generation"


class UsageLog(UUIDPrimaryKey, Base):
    __tablename__ = "usage_log"
    __table_args__ = (Index("ix_usage_log_user_action_created", "user_id", "action_type", "created_at"),)

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("identity_user.id"))
    action_type: Mapped[str] = mapped_column(String(50))
    credits_used: Mapped[int] = mapped_column(Integer, default=1)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
