from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from caption_genius.modules.captions.models import Caption


class CaptionOut(BaseModel):
    id: uuid.UUID
    niche: str | None
    prompt: str
    caption: str
    is_favorite: bool
    usage_count: int
    last_used_at: datetime | None
    created_at: datetime

    @classmethod
    def from_caption(cls, caption: Caption) -> "CaptionOut":
        return cls(
            id=caption.id,
            niche=caption.niche.name if caption.niche else None,
            prompt=caption.prompt,
            caption=caption.generated_caption,
            is_favorite=caption.is_favorite,
            usage_count=caption.usage_count,
            last_used_at=caption.last_used_at,
            created_at=caption.created_at,
        )


class CaptionUpdate(BaseModel):
    is_favorite: bool | None = None
