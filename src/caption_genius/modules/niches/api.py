from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from caption_genius.core.db import db_session
from caption_genius.modules.niches.schemas import NicheOut
from caption_genius.modules.niches.service import list_niches

router = APIRouter(tags=["niches"])


@router.get("/niches", response_model=list[NicheOut])
def list_niches_endpoint(session: Session = Depends(db_session)) -> list[NicheOut]:
    return [NicheOut.model_validate(n, from_attributes=True) for n in list_niches(session)]
