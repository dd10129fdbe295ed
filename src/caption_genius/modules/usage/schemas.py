from __future__ import annotations

from pydantic import BaseModel


class UsageSummaryOut(BaseModel):
    used: int
    quota: int
    remaining: int
    window_hours: int
    credits_remaining: int
    metered: bool
