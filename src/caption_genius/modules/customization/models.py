from __future__ import annotations

import uuid

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from caption_genius.core.models import Base, Timestamped, UUIDPrimaryKey


class AIConfiguration(UUIDPrimaryKey, Timestamped, Base):
    """A user's caption voice. At most one row per user is active."""

    __tablename__ = "customization_ai_configuration"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("identity_user.id"), index=True
    )
    purpose: Mapped[str] = mapped_column(String(500))
    tone: Mapped[str] = mapped_column(String(200))
    preferences: Mapped[str] = mapped_column(Text)
    additional_traits: Mapped[str | None] = mapped_column(Text, nullable=True)
    niche_vocabulary: Mapped[list] = mapped_column(JSON, default=list)
    sample_posts: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
