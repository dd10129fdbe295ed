from __future__ import annotations

import uuid

from pydantic import BaseModel


class CaptionRequest(BaseModel):
    # Bounds are enforced by validate_caption_request so failures map to 400.
    niche: str | None = None
    input: str | None = None


class CaptionResponse(BaseModel):
    caption: str
    caption_id: uuid.UUID
    warnings: list[str] = []
