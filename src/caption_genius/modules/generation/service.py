from __future__ import annotations

import time
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from caption_genius.core.config import settings
from caption_genius.core.errors import (
    CaptionGeniusError,
    CaptionPersistFailed,
    ConfigurationLookupFailed,
    InvalidNiche,
)
from caption_genius.core.logging import get_logger, log_event, log_exception, monotonic_ms
from caption_genius.modules.captions.models import Caption
from caption_genius.modules.captions.service import create_caption
from caption_genius.modules.customization.service import get_active_configuration
from caption_genius.modules.generation.completion import request_caption
from caption_genius.modules.generation.prompts import build_caption_prompt
from caption_genius.modules.generation.validation import validate_caption_request
from caption_genius.modules.identity.models import User
from caption_genius.modules.niches.service import resolve_niche
from caption_genius.modules.usage.models import ACTION_CAPTION_GENERATION
from caption_genius.modules.usage.service import (
    Allowance,
    check_generation_allowance,
    consume_credit,
    record_usage,
)

logger = get_logger(__name__)

WARNING_USAGE_LOG = "usage_log_not_recorded"
WARNING_CREDIT = "credit_not_decremented"
WARNING_CREDIT_EXHAUSTED = "credit_balance_exhausted"


@dataclass
class GenerationOutcome:
    """The stored caption plus any accounting writes that did not land."""

    caption: Caption
    text: str
    model: str
    prompt: str
    warnings: list[str] = field(default_factory=list)


def generate_caption(
    session: Session,
    *,
    user: User,
    niche: str | None,
    text: str | None,
) -> GenerationOutcome:
    start = time.monotonic()
    try:
        validate_caption_request(niche=niche, text=text, user_id=user.id)

        allowance = check_generation_allowance(
            session,
            user_id=user.id,
            quota=settings.daily_caption_quota,
            window_hours=settings.quota_window_hours,
        )
    except CaptionGeniusError as e:
        log_event(
            logger,
            "caption.generate.rejected",
            reason=type(e).__name__,
            status_code=e.status_code,
        )
        raise

    log_event(
        logger,
        "caption.generate.start",
        niche=niche,
        input_length=len(text),
        used=allowance.used,
        quota=allowance.quota,
        credits_remaining=allowance.credits_remaining,
    )

    try:
        config = get_active_configuration(session, user_id=user.id)
    except SQLAlchemyError as e:
        session.rollback()
        log_exception(logger, "caption.generate.error", stage="configuration")
        raise ConfigurationLookupFailed(str(e)) from e

    prompt = build_caption_prompt(niche=niche, text=text, config=config)

    try:
        completion = request_caption(prompt)
    except CaptionGeniusError as e:
        log_event(
            logger,
            "caption.generate.error",
            stage="completion",
            reason=type(e).__name__,
            duration_ms=monotonic_ms(start),
        )
        raise

    caption = _store_caption(session, user=user, niche=niche, text=text, generated=completion.text)
    warnings = _record_accounting(
        session, user=user, niche=niche, model=completion.model, allowance=allowance
    )

    log_event(
        logger,
        "caption.generate.finish",
        caption_id=str(caption.id),
        model=completion.model,
        configured=config is not None,
        warnings=warnings or None,
        duration_ms=monotonic_ms(start),
    )
    return GenerationOutcome(
        caption=caption,
        text=completion.text,
        model=completion.model,
        prompt=prompt,
        warnings=warnings,
    )


def _store_caption(
    session: Session, *, user: User, niche: str, text: str, generated: str
) -> Caption:
    try:
        niche_row = resolve_niche(session, name=niche)
        if niche_row is None:
            log_event(logger, "caption.generate.error", stage="niche", niche=niche)
            raise InvalidNiche(niche)

        return create_caption(
            session,
            user_id=user.id,
            niche_id=niche_row.id,
            prompt=text,
            generated_caption=generated,
        )
    except SQLAlchemyError as e:
        session.rollback()
        log_exception(logger, "caption.generate.error", stage="persist", niche=niche)
        raise CaptionPersistFailed(str(e)) from e


def _record_accounting(
    session: Session, *, user: User, niche: str, model: str, allowance: Allowance
) -> list[str]:
    """Usage log and credit decrement are best-effort: failures become warnings."""
    warnings: list[str] = []

    try:
        record_usage(
            session,
            user_id=user.id,
            action_type=ACTION_CAPTION_GENERATION,
            credits_used=1,
            details={"niche": niche, "model": model},
        )
    except SQLAlchemyError:
        session.rollback()
        log_exception(logger, "usage.log.failed", niche=niche)
        warnings.append(WARNING_USAGE_LOG)

    if allowance.credits_remaining > 0:
        try:
            if not consume_credit(session, user_id=user.id):
                log_event(logger, "usage.credit.exhausted")
                warnings.append(WARNING_CREDIT_EXHAUSTED)
        except SQLAlchemyError:
            session.rollback()
            log_exception(logger, "usage.credit.failed")
            warnings.append(WARNING_CREDIT)

    return warnings
