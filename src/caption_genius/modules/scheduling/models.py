from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from caption_genius.core.models import Base, Timestamped, UUIDPrimaryKey


class Platform(str, enum.Enum):
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"


class PostStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ContentType(str, enum.Enum):
    PROMOTIONAL = "promotional"
    EDUCATIONAL = "educational"
    ENTERTAINING = "entertaining"
    ENGAGEMENT = "engagement"


class ScheduledPost(UUIDPrimaryKey, Timestamped, Base):
    __tablename__ = "scheduling_scheduled_post"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("identity_user.id"), index=True
    )
    caption_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("captions_caption.id"), index=True
    )
    scheduled_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    platform: Mapped[Platform] = mapped_column(Enum(Platform, native_enum=False))
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, native_enum=False), default=PostStatus.SCHEDULED, index=True
    )
    content_type: Mapped[ContentType] = mapped_column(Enum(ContentType, native_enum=False))

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    retry_count: Mapped[int] = mapped_column(Integer, default=0)
    next_retry_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    metadata_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    caption = relationship("Caption", lazy="joined")
