from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from caption_genius.modules.scheduling.models import (
    ContentType,
    Platform,
    PostStatus,
    ScheduledPost,
)


class ScheduledPostCreate(BaseModel):
    caption_id: uuid.UUID
    scheduled_time: datetime
    platform: Platform = Platform.INSTAGRAM
    content_type: ContentType = ContentType.PROMOTIONAL


class ScheduledPostUpdate(BaseModel):
    caption_id: uuid.UUID | None = None
    scheduled_time: datetime | None = None
    platform: Platform | None = None
    content_type: ContentType | None = None
    status: PostStatus | None = None


class ScheduledPostOut(BaseModel):
    id: uuid.UUID
    caption_id: uuid.UUID
    caption: str | None
    niche: str | None
    scheduled_time: datetime
    platform: Platform
    status: PostStatus
    content_type: ContentType
    error_message: str | None
    retry_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: ScheduledPost) -> "ScheduledPostOut":
        caption = post.caption
        return cls(
            id=post.id,
            caption_id=post.caption_id,
            caption=caption.generated_caption if caption else None,
            niche=caption.niche.name if caption and caption.niche else None,
            scheduled_time=post.scheduled_time,
            platform=post.platform,
            status=post.status,
            content_type=post.content_type,
            error_message=post.error_message,
            retry_count=post.retry_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class ContentMixOut(BaseModel):
    content_type: ContentType
    count: int
    percentage: float
