from __future__ import annotations

import uuid

from pydantic import BaseModel


class NicheOut(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None
    icon: str | None
