from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class AIConfigurationIn(BaseModel):
    purpose: str = Field(min_length=1, max_length=500)
    tone: str = Field(min_length=1, max_length=200)
    preferences: str = Field(min_length=1, max_length=2000)
    additional_traits: str | None = Field(default=None, max_length=2000)
    niche_vocabulary: list[str] = Field(default_factory=list, max_length=50)
    sample_posts: list[str] = Field(default_factory=list, max_length=5)

    @field_validator("niche_vocabulary", "sample_posts")
    @classmethod
    def _drop_blank(cls, value: list[str]) -> list[str]:
        return [v.strip() for v in value if v and v.strip()]


class AIConfigurationOut(BaseModel):
    id: uuid.UUID
    purpose: str
    tone: str
    preferences: str
    additional_traits: str | None
    niche_vocabulary: list[str]
    sample_posts: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
