from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from caption_genius.modules.identity.models import SubscriptionStatus


class UserOut(BaseModel):
    id: uuid.UUID
    email: EmailStr
    full_name: str | None
    is_active: bool


class UserRegister(BaseModel):
    email: EmailStr
    password: str
    full_name: str | None = None


class ProfileOut(BaseModel):
    user_id: uuid.UUID
    username: str | None
    company_name: str | None
    website: str | None
    subscription_plan_id: str | None
    subscription_status: SubscriptionStatus | None
    subscription_end_date: datetime | None
    credits_remaining: int
    credits_reset_date: datetime | None


class ProfileUpdate(BaseModel):
    username: str | None = Field(default=None, max_length=100)
    company_name: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)


class PasswordChange(BaseModel):
    current_password: str | None = None
    new_password: str | None = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class MessageOut(BaseModel):
    message: str
