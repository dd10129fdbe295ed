from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.db import db_session
from caption_genius.core.security import create_access_token
from caption_genius.modules.identity.models import User
from caption_genius.modules.identity.schemas import (
    MessageOut,
    PasswordChange,
    ProfileOut,
    ProfileUpdate,
    TokenOut,
    UserOut,
    UserRegister,
)
from caption_genius.modules.identity.service import (
    authenticate_user,
    change_password,
    create_user,
    delete_account,
    get_profile,
    update_profile,
)

router = APIRouter(tags=["identity"])


@router.post("/auth/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, session: Session = Depends(db_session)) -> TokenOut:
    user = create_user(
        session,
        email=str(payload.email),
        password=payload.password,
        full_name=payload.full_name,
    )
    return TokenOut(access_token=create_access_token(user_id=user.id))


@router.post("/auth/token", response_model=TokenOut)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(db_session),
) -> TokenOut:
    user = authenticate_user(session, email=form_data.username, password=form_data.password)
    return TokenOut(access_token=create_access_token(user_id=user.id))


@router.get("/auth/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user, from_attributes=True)


@router.get("/auth/profile", response_model=ProfileOut)
def read_profile(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> ProfileOut:
    profile = get_profile(session, user_id=user.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return ProfileOut.model_validate(profile, from_attributes=True)


@router.patch("/auth/profile", response_model=ProfileOut)
def edit_profile(
    payload: ProfileUpdate,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> ProfileOut:
    profile = update_profile(session, user=user, **payload.model_dump(exclude_unset=True))
    return ProfileOut.model_validate(profile, from_attributes=True)


@router.post("/auth/change-password", response_model=MessageOut)
def change_password_endpoint(
    payload: PasswordChange,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> MessageOut:
    change_password(
        session,
        user=user,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )
    return MessageOut(message="Password updated successfully")


@router.post("/auth/delete-account", response_model=MessageOut)
def delete_account_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> MessageOut:
    delete_account(session, user=user)
    return MessageOut(message="Account deleted successfully")
