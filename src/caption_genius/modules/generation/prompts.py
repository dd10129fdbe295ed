"""Caption prompt assembly.

The prompt is a fixed lead sentence, then one clause per configured voice
setting, then a fixed closing instruction. Each clause builder returns None
when its setting is unset, so a user without an active configuration gets
the lead and closing lines only.
"""

from __future__ import annotations

from collections.abc import Callable

from caption_genius.modules.customization.models import AIConfiguration

SYSTEM_INSTRUCTION = (
    "You are a creative social media copywriter who specializes in writing engaging captions."
)

CLOSING_INSTRUCTION = (
    "Make it authentic, engaging, and suitable for Instagram. Include relevant hashtags."
)

ClauseBuilder = Callable[[AIConfiguration], str | None]


def _text(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def _purpose(config: AIConfiguration) -> str | None:
    purpose = _text(config.purpose)
    return f"Purpose: {purpose}." if purpose else None


def _tone(config: AIConfiguration) -> str | None:
    tone = _text(config.tone)
    return f"Tone: {tone}." if tone else None


def _style(config: AIConfiguration) -> str | None:
    preferences = _text(config.preferences)
    return f"Style and preferences: {preferences}." if preferences else None


def _traits(config: AIConfiguration) -> str | None:
    traits = _text(config.additional_traits)
    return f"Additional traits: {traits}." if traits else None


def _vocabulary(config: AIConfiguration) -> str | None:
    terms = [t.strip() for t in (config.niche_vocabulary or []) if t and t.strip()]
    if not terms:
        return None
    return f"Use these niche-specific terms where they fit: {', '.join(terms)}."


def _samples(config: AIConfiguration) -> str | None:
    posts = [p.strip() for p in (config.sample_posts or []) if p and p.strip()]
    if not posts:
        return None
    return "Match the style of these example posts: " + " | ".join(f'"{p}"' for p in posts)


CLAUSE_BUILDERS: tuple[ClauseBuilder, ...] = (
    _purpose,
    _tone,
    _style,
    _traits,
    _vocabulary,
    _samples,
)


def build_lead(*, niche: str, text: str) -> str:
    return (
        f"Generate a creative and engaging social media caption for a {niche} business.\n"
        f"Context: {text}"
    )


def build_caption_prompt(*, niche: str, text: str, config: AIConfiguration | None) -> str:
    parts = [build_lead(niche=niche, text=text)]
    if config is not None:
        parts.extend(c for c in (builder(config) for builder in CLAUSE_BUILDERS) if c)
    parts.append(CLOSING_INSTRUCTION)
    return "\n".join(parts)


def build_messages(prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": prompt},
    ]
