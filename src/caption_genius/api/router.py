from __future__ import annotations

from fastapi import APIRouter

from caption_genius.modules.captions.api import router as captions_router
from caption_genius.modules.customization.api import router as customization_router
from caption_genius.modules.generation.api import router as generation_router
from caption_genius.modules.identity.api import router as identity_router
from caption_genius.modules.niches.api import router as niches_router
from caption_genius.modules.scheduling.api import router as scheduling_router
from caption_genius.modules.usage.api import router as usage_router

router = APIRouter()

router.include_router(identity_router, prefix="/api")
router.include_router(niches_router, prefix="/api")
router.include_router(customization_router, prefix="/api")
router.include_router(generation_router, prefix="/api")
router.include_router(captions_router, prefix="/api")
router.include_router(usage_router, prefix="/api")
router.include_router(scheduling_router, prefix="/api")


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
