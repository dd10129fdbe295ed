from __future__ import annotations

from caption_genius.core.errors import ValidationError

MIN_INPUT_LENGTH = 10
MAX_INPUT_LENGTH = 500


def validate_caption_request(*, niche: str | None, text: str | None, user_id: object) -> None:
    if not user_id:
        raise ValidationError("User ID is required")
    if not niche or not niche.strip():
        raise ValidationError("Niche is required")
    if not text or len(text) < MIN_INPUT_LENGTH:
        raise ValidationError(
            f"Post description must be at least {MIN_INPUT_LENGTH} characters"
        )
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(f"Post description cannot exceed {MAX_INPUT_LENGTH} characters")
