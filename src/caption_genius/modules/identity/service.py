from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from caption_genius.core.config import settings
from caption_genius.core.logging import get_logger, log_event
from caption_genius.core.security import hash_password, verify_password
from caption_genius.modules.identity.models import Profile, User

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


def get_user_by_email(session: Session, *, email: str) -> User | None:
    return session.scalar(select(User).where(User.email == email.strip().lower()))


def get_profile(session: Session, *, user_id: uuid.UUID) -> Profile | None:
    return session.scalar(select(Profile).where(Profile.user_id == user_id))


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    full_name: str | None = None,
    credits_remaining: int | None = None,
    subscription_plan_id: str | None = None,
) -> User:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if get_user_by_email(session, email=email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    user = User(
        email=email.strip().lower(),
        full_name=full_name,
        password_hash=hash_password(password),
        is_active=True,
    )
    session.add(user)
    session.flush()
    session.add(
        Profile(
            user_id=user.id,
            credits_remaining=(
                settings.signup_credits if credits_remaining is None else credits_remaining
            ),
            subscription_plan_id=subscription_plan_id,
        )
    )
    session.commit()
    session.refresh(user)
    log_event(logger, "identity.user.created", created_user_id=str(user.id))
    return user


def authenticate_user(session: Session, *, email: str, password: str) -> User:
    user = get_user_by_email(session, email=email)
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return user


def update_profile(session: Session, *, user: User, **changes) -> Profile:
    profile = get_profile(session, user_id=user.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    for field, value in changes.items():
        if value is None:
            continue
        setattr(profile, field, value)
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def change_password(
    session: Session,
    *,
    user: User,
    current_password: str | None,
    new_password: str | None,
) -> None:
    if not current_password or not new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields"
        )
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if not verify_password(current_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect"
        )

    user.password_hash = hash_password(new_password)
    session.add(user)
    session.commit()
    log_event(logger, "identity.password.changed")


def delete_account(session: Session, *, user: User) -> None:
    """Remove the user together with every row they own."""
    from caption_genius.modules.captions.models import Caption
    from caption_genius.modules.customization.models import AIConfiguration
    from caption_genius.modules.scheduling.models import ScheduledPost
    from caption_genius.modules.usage.models import UsageLog

    user_id = user.id
    for model in (ScheduledPost, Caption, UsageLog, AIConfiguration, Profile):
        session.execute(delete(model).where(model.user_id == user_id))
    session.execute(delete(User).where(User.id == user_id))
    session.commit()
    log_event(logger, "identity.account.deleted", deleted_user_id=str(user_id))
