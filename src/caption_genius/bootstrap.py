from __future__ import annotations

import caption_genius.models  # noqa: F401
from caption_genius.core.config import settings
from caption_genius.core.db import engine, session_scope
from caption_genius.core.logging import get_logger, log_event
from caption_genius.core.models import Base
from caption_genius.modules.niches.service import seed_default_niches

logger = get_logger(__name__)


def bootstrap() -> None:
    if settings.environment == "dev" and str(settings.database_url).startswith("sqlite"):
        Base.metadata.create_all(engine)

    if not settings.seed_default_niches:
        return

    with session_scope() as session:
        created = seed_default_niches(session)
    if created:
        log_event(logger, "bootstrap.niches.seeded", count=created)
