from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from caption_genius.api.deps import get_current_user
from caption_genius.core.db import db_session
from caption_genius.modules.customization.schemas import AIConfigurationIn, AIConfigurationOut
from caption_genius.modules.customization.service import (
    activate_configuration,
    deactivate_configuration,
    get_active_configuration,
    list_configurations,
)
from caption_genius.modules.identity.models import User

router = APIRouter(tags=["customization"])


@router.get("/ai-configuration", response_model=AIConfigurationOut | None)
def get_configuration_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> AIConfigurationOut | None:
    config = get_active_configuration(session, user_id=user.id)
    if config is None:
        return None
    return AIConfigurationOut.model_validate(config, from_attributes=True)


@router.put("/ai-configuration", response_model=AIConfigurationOut)
def save_configuration_endpoint(
    payload: AIConfigurationIn,
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> AIConfigurationOut:
    config = activate_configuration(session, user_id=user.id, **payload.model_dump())
    return AIConfigurationOut.model_validate(config, from_attributes=True)


@router.delete("/ai-configuration", status_code=status.HTTP_204_NO_CONTENT)
def reset_configuration_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> None:
    deactivate_configuration(session, user_id=user.id)


@router.get("/ai-configurations", response_model=list[AIConfigurationOut])
def list_configurations_endpoint(
    session: Session = Depends(db_session),
    user: User = Depends(get_current_user),
) -> list[AIConfigurationOut]:
    return [
        AIConfigurationOut.model_validate(c, from_attributes=True)
        for c in list_configurations(session, user_id=user.id)
    ]
