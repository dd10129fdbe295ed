from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from caption_genius.core.db import db_session
from caption_genius.core.errors import Unauthenticated
from caption_genius.core.logging import set_user_context
from caption_genius.core.security import decode_access_token
from caption_genius.modules.identity.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(db_session),
) -> User:
    """Resolve the bearer token into the calling user.

    The user is handed to each route explicitly; nothing is kept globally
    apart from the logging context.
    """
    token = credentials.credentials if credentials else None
    if not token:
        raise Unauthenticated()

    user_id = decode_access_token(token)
    if not user_id:
        raise Unauthenticated("Invalid token - Please sign in again")

    user = session.scalar(select(User).where(User.id == user_id))
    if not user or not user.is_active:
        raise Unauthenticated("Invalid user - Please sign in again")
    set_user_context(str(user.id))
    return user
